from flask import Blueprint, current_app, jsonify, request, send_from_directory

from quizroom.api.common import teacher_required
from quizroom.services.media import store_upload

media_bp = Blueprint("media", __name__)


@media_bp.post("/api/media")
@teacher_required
def upload():
    """Multipart ``file`` field; answers with the public URL of the stored copy."""
    upload_file = request.files.get("file")
    if upload_file is None:
        return jsonify({"error": "file is required"}), 400
    return jsonify(store_upload(upload_file, current_app.config)), 201


@media_bp.get("/media/<path:filename>")
def serve(filename: str):
    return send_from_directory(current_app.config["MEDIA_DIR"], filename)
