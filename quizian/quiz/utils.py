import random
import string
from typing import Optional


SHARE_CODE_ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase

QUIZ_TEXT_FORMAT_EXAMPLE = """Câu 1: 1 + 1 bằng mấy?
*2
3
5
6

Câu 2: 1 + 2 bằng mấy?
2
*3
5
6"""

QUIZ_TEXT_FORMAT_HELP = (
    "Start each question on its own line with its number (\"1.\", \"2)\", \"Câu 3:\"). "
    "Put each answer on the following lines and prefix the correct one with \"*\". "
    "Answer letters such as \"A.\" or \"b)\" are removed. Blank lines are ignored."
)


def generate_share_code(length: Optional[int] = None) -> str:
    """
    Generate a random share code over digits and ASCII letters.
    Default length is 10.
    """
    if length is None:
        length = 10
    return "".join(random.choices(SHARE_CODE_ALPHABET, k=length))


def validate_questions(questions) -> tuple[bool, str | None]:
    """
    Check questions coming from the editor or the text parser.

    Every question needs text, at least one answer, no empty answer
    and exactly one correct answer.
    Returns (is_valid, error_message).
    """
    if not isinstance(questions, list) or not questions:
        return False, "At least one question is required"

    for number, question in enumerate(questions, start=1):
        if not isinstance(question, dict):
            return False, f"Question {number} is malformed"

        question_text = question.get("question_text")
        if not isinstance(question_text, str) or not question_text.strip():
            return False, f"Question {number} has no text"

        image_url = question.get("image_url")
        if image_url is not None and not isinstance(image_url, str):
            return False, f"Question {number} has an invalid image URL"

        answers = question.get("answers")
        if not isinstance(answers, list) or not answers:
            return False, f"Question {number} has no answers"

        for answer in answers:
            if not isinstance(answer, dict):
                return False, f"Question {number} is malformed"
            text = answer.get("text")
            if not isinstance(text, str) or not text.strip():
                return False, f"Question {number} has an empty answer"

        correct_count = sum(1 for answer in answers if answer.get("is_correct"))
        if correct_count != 1:
            return False, f"Question {number} must have exactly one correct answer"

    return True, None


def shuffle_questions(questions: list[dict], reorder_questions: bool = False,
                      reorder_answers: bool = False, rng: Optional[random.Random] = None) -> list[dict]:
    """Return a shuffled copy of serialized questions; the input is left untouched."""
    rng = rng or random.Random()
    result = [dict(question, answers=list(question.get("answers", []))) for question in questions]

    if reorder_questions:
        rng.shuffle(result)
    if reorder_answers:
        for question in result:
            rng.shuffle(question["answers"])

    return result
