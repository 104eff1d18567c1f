"""Unit tests for quiz question generation."""

import json

import pytest

from conftest import make_llm_response, make_quiz_payload
from career_coach.modules.interview import QuizCategory, QuizGenerator
from career_coach.shared.exceptions import GenerationError


class TestQuizGenerator:
    """Tests for QuizGenerator."""

    @pytest.fixture
    def generator(self, mock_llm_service):
        return QuizGenerator(llm_service=mock_llm_service, question_count=10)

    def _respond(self, mock_llm_service, content):
        mock_llm_service.complete.return_value = make_llm_response(content)

    async def test_generates_full_question_set(self, generator, mock_llm_service, sample_profile, quiz_json):
        self._respond(mock_llm_service, quiz_json)

        question_set = await generator.generate(sample_profile, QuizCategory.TECHNICAL)

        assert len(question_set) == 10
        assert question_set.category == QuizCategory.TECHNICAL
        for i, question in enumerate(question_set):
            assert len(question.options) == 4
            assert question.correct_answer == f"Answer {i}"
            assert question.correct_answer in question.options
            assert question.category == QuizCategory.TECHNICAL

    async def test_prompt_embeds_profile_and_category(self, generator, mock_llm_service, sample_profile, quiz_json):
        self._respond(mock_llm_service, quiz_json)

        await generator.generate(sample_profile, QuizCategory.BEHAVIORAL)

        prompt = mock_llm_service.complete.call_args.kwargs["prompt"]
        assert "Software Engineering" in prompt
        assert "JavaScript" in prompt
        assert "behavioral" in prompt
        assert "past experiences" in prompt
        assert "10" in prompt

    async def test_prompt_without_skills(self, generator, mock_llm_service, sample_profile, quiz_json):
        sample_profile.skills = []
        self._respond(mock_llm_service, quiz_json)

        await generator.generate(sample_profile, QuizCategory.TECHNICAL)

        prompt = mock_llm_service.complete.call_args.kwargs["prompt"]
        assert "expertise in" not in prompt

    async def test_fenced_response(self, generator, mock_llm_service, sample_profile, quiz_json):
        self._respond(mock_llm_service, f"```json\n{quiz_json}\n```")

        question_set = await generator.generate(sample_profile, QuizCategory.TECHNICAL)

        assert len(question_set) == 10

    @pytest.mark.parametrize("fenced", [False, True])
    async def test_code_samples_in_questions(self, generator, mock_llm_service, sample_profile, fenced):
        payload = make_quiz_payload()
        payload["questions"][2]["explanation"] = "Run ```python\nx = 1\n``` to see it."
        content = json.dumps(payload)
        self._respond(mock_llm_service, f"```json\n{content}\n```" if fenced else content)

        question_set = await generator.generate(sample_profile, QuizCategory.TECHNICAL)

        assert len(question_set) == 10
        assert question_set[2].explanation == "Run ```python\nx = 1\n``` to see it."

    async def test_missing_category_defaults_to_requested(self, generator, mock_llm_service, sample_profile):
        self._respond(mock_llm_service, json.dumps(make_quiz_payload(category=None)))

        question_set = await generator.generate(sample_profile, QuizCategory.LEADERSHIP)

        assert all(q.category == QuizCategory.LEADERSHIP for q in question_set)

    async def test_legacy_type_tag(self, generator, mock_llm_service, sample_profile):
        payload = make_quiz_payload(category=None)
        for question in payload["questions"]:
            question["type"] = "Leadership"
        self._respond(mock_llm_service, json.dumps(payload))

        question_set = await generator.generate(sample_profile, QuizCategory.TECHNICAL)

        assert all(q.category == QuizCategory.LEADERSHIP for q in question_set)

    async def test_invalid_json(self, generator, mock_llm_service, sample_profile):
        self._respond(mock_llm_service, "Sorry, I can't help with that.")

        with pytest.raises(GenerationError) as exc_info:
            await generator.generate(sample_profile, QuizCategory.TECHNICAL)

        # Parser text stays out of the user-facing message
        assert exc_info.value.message == "Failed to generate interview questions"

    async def test_missing_correct_answer(self, generator, mock_llm_service, sample_profile):
        payload = make_quiz_payload()
        del payload["questions"][3]["correctAnswer"]
        self._respond(mock_llm_service, json.dumps(payload))

        with pytest.raises(GenerationError):
            await generator.generate(sample_profile, QuizCategory.TECHNICAL)

    @pytest.mark.parametrize("mutate", [
        lambda q: q.update(options=q["options"][:3]),
        lambda q: q.update(options=q["options"] + ["Extra"]),
        lambda q: q.update(options=[q["correctAnswer"]] * 4),
        lambda q: q.update(correctAnswer="Not an option"),
        lambda q: q.update(question="  "),
        lambda q: q.update(explanation=""),
        lambda q: q.update(category="trivia"),
    ])
    async def test_malformed_question_rejected(self, generator, mock_llm_service, sample_profile, mutate):
        payload = make_quiz_payload()
        mutate(payload["questions"][0])
        self._respond(mock_llm_service, json.dumps(payload))

        with pytest.raises(GenerationError):
            await generator.generate(sample_profile, QuizCategory.TECHNICAL)

    @pytest.mark.parametrize("content", ['{"questions": []}', '{"items": []}', '[]', '"text"'])
    async def test_wrong_shape_rejected(self, generator, mock_llm_service, sample_profile, content):
        self._respond(mock_llm_service, content)

        with pytest.raises(GenerationError):
            await generator.generate(sample_profile, QuizCategory.TECHNICAL)
