"""
Database models for quizzes.

Only single-answer multiple choice questions exist: a quiz owns ordered
questions, each question owns ordered answers, one of them correct.
"""
from datetime import datetime
from quizian import db


class Quiz(db.Model):
    """A quiz authored by a user, reachable by anyone holding its share code."""
    __tablename__ = "quizzes"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete='CASCADE'), nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    share_code = db.Column(db.String(32), unique=True, nullable=False, index=True)
    is_public = db.Column(db.Boolean, default=True, nullable=False, index=True)
    tags = db.Column(db.JSON, nullable=False, default=list)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    questions = db.relationship("Question", backref="quiz", lazy="dynamic", cascade="all, delete-orphan", order_by="Question.order_index")
    attempts = db.relationship("QuizAttempt", backref="quiz", lazy="dynamic", cascade="all, delete-orphan")

    __table_args__ = (
        db.Index('ix_quizzes_user_created', 'user_id', 'created_at'),
    )

    def __repr__(self) -> str:
        return f"<Quiz {self.id}: {self.title}>"

    def get_question_count(self) -> int:
        return self.questions.count()

    def replace_questions(self, questions: list[dict]) -> None:
        """Drop the current questions and store the given ones in order."""
        for question in self.questions.all():
            db.session.delete(question)
        db.session.flush()

        for index, data in enumerate(questions):
            question = Question(
                quiz=self,
                question_text=data["question_text"].strip(),
                image_url=(data.get("image_url") or "").strip() or None,
                order_index=index,
            )
            for answer_index, answer in enumerate(data["answers"]):
                question.answers.append(Answer(
                    text=answer["text"].strip(),
                    is_correct=bool(answer.get("is_correct")),
                    order_index=answer_index,
                ))
            db.session.add(question)

    def to_dict(self, include_questions: bool = False) -> dict:
        data = {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'share_code': self.share_code,
            'is_public': self.is_public,
            'tags': self.tags or [],
            'username': self.owner.username if self.owner else None,
            'question_count': self.get_question_count(),
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_questions:
            data['questions'] = [question.to_dict() for question in self.questions.all()]
        return data


class Question(db.Model):
    """A question with its ordered answers."""
    __tablename__ = "quiz_questions"

    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id", ondelete='CASCADE'), nullable=False, index=True)
    question_text = db.Column(db.Text, nullable=False)
    image_url = db.Column(db.String(512), nullable=True)
    order_index = db.Column(db.Integer, nullable=False, default=0)

    answers = db.relationship("Answer", backref="question", cascade="all, delete-orphan", order_by="Answer.order_index")

    __table_args__ = (
        db.Index('ix_quiz_questions_quiz_order', 'quiz_id', 'order_index'),
    )

    def __repr__(self) -> str:
        return f"<Question {self.id}: {self.question_text[:50]}>"

    def to_dict(self) -> dict:
        return {
            'question_text': self.question_text,
            'image_url': self.image_url,
            'answers': [answer.to_dict() for answer in self.answers],
        }


class Answer(db.Model):
    """One choice of a question."""
    __tablename__ = "quiz_answers"

    id = db.Column(db.Integer, primary_key=True)
    question_id = db.Column(db.Integer, db.ForeignKey("quiz_questions.id", ondelete='CASCADE'), nullable=False, index=True)
    text = db.Column(db.Text, nullable=False)
    is_correct = db.Column(db.Boolean, default=False, nullable=False)
    order_index = db.Column(db.Integer, nullable=False, default=0)

    __table_args__ = (
        db.Index('ix_quiz_answers_question_order', 'question_id', 'order_index'),
    )

    def __repr__(self) -> str:
        return f"<Answer {self.id}: {self.text[:50]}>"

    def to_dict(self) -> dict:
        return {'text': self.text, 'is_correct': self.is_correct}
