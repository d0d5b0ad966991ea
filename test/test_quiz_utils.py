"""
Test cases for quiz helper functions.
"""
import random

from quizian.quiz.parser import parse_quiz_text
from quizian.quiz.utils import (
    QUIZ_TEXT_FORMAT_EXAMPLE,
    SHARE_CODE_ALPHABET,
    generate_share_code,
    shuffle_questions,
    validate_questions,
)

from conftest import manual_questions


class TestShareCode:
    """Share code generation."""

    def test_default_length_and_alphabet(self):
        code = generate_share_code()
        assert len(code) == 10
        assert all(ch in SHARE_CODE_ALPHABET for ch in code)

    def test_custom_length(self):
        assert len(generate_share_code(16)) == 16

    def test_codes_differ(self):
        codes = {generate_share_code() for _ in range(50)}
        assert len(codes) == 50


class TestValidateQuestions:
    """Validation applied before quizzes are stored."""

    def test_valid_questions(self):
        assert validate_questions(manual_questions()) == (True, None)

    def test_empty_list(self):
        ok, error = validate_questions([])
        assert not ok
        assert 'At least one question' in error

    def test_not_a_list(self):
        ok, _ = validate_questions(None)
        assert not ok

    def test_missing_question_text(self):
        questions = manual_questions()
        questions[1]['question_text'] = '   '
        ok, error = validate_questions(questions)
        assert not ok
        assert error == 'Question 2 has no text'

    def test_no_answers(self):
        questions = manual_questions()
        questions[0]['answers'] = []
        assert validate_questions(questions) == (False, 'Question 1 has no answers')

    def test_empty_answer(self):
        questions = manual_questions()
        questions[0]['answers'][1]['text'] = ''
        assert validate_questions(questions) == (False, 'Question 1 has an empty answer')

    def test_no_correct_answer(self):
        questions = manual_questions()
        questions[0]['answers'][0]['is_correct'] = False
        assert validate_questions(questions) == (False, 'Question 1 must have exactly one correct answer')

    def test_two_correct_answers(self):
        questions = manual_questions()
        questions[1]['answers'][0]['is_correct'] = True
        assert validate_questions(questions) == (False, 'Question 2 must have exactly one correct answer')

    def test_non_string_fields(self):
        questions = manual_questions()
        questions[0]['question_text'] = 5
        assert validate_questions(questions) == (False, 'Question 1 has no text')

        questions = manual_questions()
        questions[0]['answers'][0]['text'] = None
        assert validate_questions(questions) == (False, 'Question 1 has an empty answer')

        questions = manual_questions()
        questions[1]['image_url'] = 7
        assert validate_questions(questions) == (False, 'Question 2 has an invalid image URL')

    def test_answer_that_is_not_an_object(self):
        questions = manual_questions()
        questions[0]['answers'].append('Berlin')
        assert validate_questions(questions) == (False, 'Question 1 is malformed')

    def test_parsed_example_is_valid(self):
        questions = parse_quiz_text(QUIZ_TEXT_FORMAT_EXAMPLE)
        assert [q['question_text'] for q in questions] == ['1 + 1 bằng mấy?', '1 + 2 bằng mấy?']
        assert validate_questions(questions) == (True, None)


class TestShuffle:
    """Shuffling for the take-quiz flow."""

    def make_questions(self):
        return [
            {'question_text': f'Q{n}', 'answers': [{'text': f'{n}-{i}', 'is_correct': i == 0} for i in range(4)]}
            for n in range(10)
        ]

    def test_no_shuffle_returns_equal_copy(self):
        questions = self.make_questions()
        result = shuffle_questions(questions)
        assert result == questions
        assert result is not questions
        assert result[0]['answers'] is not questions[0]['answers']

    def test_shuffle_keeps_content(self):
        questions = self.make_questions()
        result = shuffle_questions(questions, True, True, rng=random.Random(7))

        assert sorted(q['question_text'] for q in result) == sorted(q['question_text'] for q in questions)
        by_text = {q['question_text']: q for q in questions}
        for question in result:
            original = by_text[question['question_text']]
            assert sorted(a['text'] for a in question['answers']) == sorted(a['text'] for a in original['answers'])
            assert sum(a['is_correct'] for a in question['answers']) == 1

    def test_input_is_not_mutated(self):
        questions = self.make_questions()
        snapshot = [dict(q, answers=list(q['answers'])) for q in questions]
        shuffle_questions(questions, True, True, rng=random.Random(3))
        assert questions == snapshot

    def test_seeded_shuffle_is_reproducible(self):
        questions = self.make_questions()
        first = shuffle_questions(questions, True, True, rng=random.Random(42))
        second = shuffle_questions(questions, True, True, rng=random.Random(42))
        assert first == second

    def test_answers_only(self):
        questions = self.make_questions()
        result = shuffle_questions(questions, reorder_answers=True, rng=random.Random(1))
        assert [q['question_text'] for q in result] == [q['question_text'] for q in questions]

    def test_questions_only(self):
        questions = self.make_questions()
        result = shuffle_questions(questions, reorder_questions=True, rng=random.Random(5))
        by_text = {q['question_text']: q for q in questions}
        for question in result:
            assert question['answers'] == by_text[question['question_text']]['answers']
