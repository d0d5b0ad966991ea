"""
Integration test cases for complete user flows.
"""
from conftest import register


class TestAuthorFlow:
    """An author pastes a quiz, shares it and another user takes it."""

    def test_paste_share_take_flow(self, app):
        author = app.test_client()
        player = app.test_client()

        # Step 1: Author registers and previews the pasted text
        assert register(author, username='author', full_name='Quiz Author').status_code == 201
        text = (
            "Câu 1: Thủ đô của Việt Nam?\n"
            "A. Huế\n"
            "*B. Hà Nội\n"
            "C. Đà Nẵng\n"
            "\n"
            "Câu 2: 2 x 3 = ?\n"
            "*6\n"
            "5\n"
        )
        preview = author.post('/api/quizzes/parse', json={'paste_text': text}).get_json()
        assert preview['question_count'] == 2
        assert preview['is_valid'] is True

        # Step 2: Author saves it
        created = author.post('/api/quizzes', json={
            'title': 'Kiểm tra nhanh',
            'paste_mode': True,
            'paste_text': text,
        })
        assert created.status_code == 201
        share_code = created.get_json()['quiz']['share_code']

        # Step 3: Player opens the shared quiz and submits a result
        assert register(player, username='player', full_name='Quiz Player').status_code == 201
        quiz = player.get(f'/api/quizzes/share/{share_code}').get_json()['quiz']
        assert quiz['questions'][0]['answers'][1] == {'text': 'Hà Nội', 'is_correct': True}

        submitted = player.post('/api/attempts', json={
            'quiz_id': quiz['id'],
            'score': 2,
            'total_questions': len(quiz['questions']),
        })
        assert submitted.status_code == 201

        # Step 4: Player sees the attempt, author does not
        history = player.get('/api/attempts').get_json()['attempts']
        assert [(a['quiz_title'], a['percentage']) for a in history] == [('Kiểm tra nhanh', 100.0)]
        assert author.get('/api/attempts').get_json()['attempts'] == []

    def test_logout_then_login_again(self, app):
        client = app.test_client()
        assert register(client).status_code == 201
        assert client.post('/api/auth/logout').status_code == 200
        assert client.post('/api/quizzes/parse', json={'paste_text': ''}).status_code == 401

        response = client.post('/api/auth/login', json={'username': 'alice', 'password': 'secret123'})
        assert response.status_code == 200
        assert client.get('/api/quizzes?my=true').get_json()['quizzes'] == []
