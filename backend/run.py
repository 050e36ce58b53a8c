"""
Development server.

Run from the backend directory:
    python run.py
"""

from quizroom import create_app
from quizroom.extensions import db

app = create_app()

with app.app_context():
    db.create_all()


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000)
