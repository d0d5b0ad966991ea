from datetime import datetime
from quizian import db


class QuizAttempt(db.Model):
    """
    A finished run through a quiz.

    quiz_title is a snapshot so history still reads well after the quiz is renamed.
    """
    __tablename__ = "quiz_attempts"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete='CASCADE'), nullable=False, index=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id", ondelete='CASCADE'), nullable=False, index=True)
    quiz_title = db.Column(db.String(255), nullable=False)
    score = db.Column(db.Integer, nullable=False, default=0)
    total_questions = db.Column(db.Integer, nullable=False, default=0)
    question_results = db.Column(db.JSON, nullable=False, default=list)
    shuffle_questions = db.Column(db.Boolean, default=False, nullable=False)
    shuffle_answers = db.Column(db.Boolean, default=False, nullable=False)
    completed_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    user = db.relationship("User", foreign_keys=[user_id], backref=db.backref("quiz_attempts", cascade="all, delete-orphan"))

    __table_args__ = (
        db.Index('ix_quiz_attempts_user_completed', 'user_id', 'completed_at'),
    )

    def __repr__(self) -> str:
        return f"<QuizAttempt {self.id}: User {self.user_id}, Quiz {self.quiz_id}>"

    def get_percentage(self) -> float:
        if not self.total_questions:
            return 0.0
        return round(self.score * 100.0 / self.total_questions, 2)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'quiz_id': self.quiz_id,
            'quiz_title': self.quiz_title,
            'score': self.score,
            'total_questions': self.total_questions,
            'percentage': self.get_percentage(),
            'question_results': self.question_results or [],
            'shuffle_questions': self.shuffle_questions,
            'shuffle_answers': self.shuffle_answers,
            'completed_at': self.completed_at.isoformat() if self.completed_at else None,
        }
