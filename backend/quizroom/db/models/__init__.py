from quizroom.db.models.user import User
from quizroom.db.models.quiz import Quiz
from quizroom.db.models.question import Question
from quizroom.db.models.quiz_session import QuizSession
from quizroom.db.models.session_participant import SessionParticipant
from quizroom.db.models.team import Team, TeamMember
from quizroom.db.models.quiz_answer import QuizAnswer
from quizroom.db.models.quiz_assignment import QuizAssignment
from quizroom.db.models.assignment_answer import AssignmentAnswer

__all__ = [
    "User",
    "Quiz",
    "Question",
    "QuizSession",
    "SessionParticipant",
    "Team",
    "TeamMember",
    "QuizAnswer",
    "QuizAssignment",
    "AssignmentAnswer",
]
