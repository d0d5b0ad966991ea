"""
Bulk quiz text parser.

Turns pasted text into question dicts ready to be stored::

    1. What is 1 + 1?
    *2
    3
    A. 4

    Câu 2: What is 2 + 2?
    3
    *4

A line is a question header when it starts with an optional ``Câu`` or
``Question`` word, a number, an optional ``:``/``.``/``)`` and at least one
space. Every other line following a header is an answer. A leading ``*``
marks the correct answer, and a leading choice letter (``A.``, ``b)``,
``C ``) is dropped. Blank lines are ignored.
"""
import re


DEFAULT_MAX_TEXT_LENGTH = 100_000

CORRECT_MARKER = "*"
ANSWER_LETTERS = "ABCDEFGH"

QUESTION_START_REGEX = re.compile(r"^(?:Câu|Question)?\s*\d+[:.)]?\s+", re.IGNORECASE)
ANSWER_PREFIX_REGEX = re.compile(r"^[A-H][.)\s]\s*", re.IGNORECASE)
LINE_BREAK_REGEX = re.compile(r"[\r\n]+")


class QuizTextTooLargeError(ValueError):
    """Raised when pasted quiz text exceeds the allowed length."""

    def __init__(self, length: int, max_length: int):
        self.length = length
        self.max_length = max_length
        super().__init__(
            f"Quiz text is too large ({length} characters, maximum is {max_length})"
        )


def parse_answer_line(line: str) -> dict:
    """Build an answer dict from a stripped, non-header line."""
    is_correct = False
    text = line
    if text.startswith(CORRECT_MARKER):
        is_correct = True
        text = text[len(CORRECT_MARKER):].strip()
    text = ANSWER_PREFIX_REGEX.sub("", text, count=1).strip()
    return {"text": text, "is_correct": is_correct}


def parse_quiz_text(text: str, max_length: int = DEFAULT_MAX_TEXT_LENGTH) -> list[dict]:
    """
    Parse pasted quiz text into a list of questions.

    Args:
        text: The raw pasted block
        max_length: Maximum accepted number of characters

    Returns:
        List of ``{"question_text": str, "answers": [{"text": str, "is_correct": bool}]}``
        in input order. Questions without any answer line are dropped.

    Raises:
        QuizTextTooLargeError: If ``text`` is longer than ``max_length``
    """
    if not text:
        return []
    if len(text) > max_length:
        raise QuizTextTooLargeError(len(text), max_length)

    lines = [line.strip() for line in text.split("\n")]
    questions = []
    current = None

    for line in lines:
        if not line:
            continue

        match = QUESTION_START_REGEX.match(line)
        if match:
            if current and current["answers"]:
                questions.append(current)
            current = {"question_text": line[match.end():].strip(), "answers": []}
        elif current is not None:
            current["answers"].append(parse_answer_line(line))

    if current and current["answers"]:
        questions.append(current)

    return questions


def _single_line(text: str) -> str:
    return LINE_BREAK_REGEX.sub(" ", text).strip()


def format_quiz_text(questions: list[dict]) -> str:
    """
    Render questions back into the paste format accepted by parse_quiz_text.

    Questions are numbered from 1 and a blank line separates them. Every
    answer gets a choice letter (``A.`` to ``H.``, then ``A.`` again) so
    answers starting with a number, a ``*`` or a letter survive re-parsing.
    Correct answers get the ``*`` marker in front of the letter.
    """
    blocks = []
    for number, question in enumerate(questions, start=1):
        lines = [f"{number}. {_single_line(question['question_text'])}"]
        for index, answer in enumerate(question["answers"]):
            marker = CORRECT_MARKER if answer.get("is_correct") else ""
            letter = ANSWER_LETTERS[index] if index < len(ANSWER_LETTERS) else ANSWER_LETTERS[0]
            lines.append(f"{marker}{letter}. {_single_line(answer['text'])}")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks) + ("\n" if blocks else "")
