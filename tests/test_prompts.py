from services.question_generator.app.prompts import build_question_prompt


def test_prompt_mentions_topic_count_and_shape() -> None:
    prompt = build_question_prompt("Cardiology", 5)
    assert 'Generate 5 high-quality multiple-choice questions (MCQs) for the topic: "Cardiology".' in prompt
    assert '"topic": "Cardiology"' in prompt
    assert "medium (30%) and hard (70%)" in prompt
    assert "4 options (A–D)" in prompt
    assert '"correct_answer": {' in prompt
    assert "Do NOT include any text outside the JSON" in prompt


def test_topic_with_braces_is_inserted_literally() -> None:
    prompt = build_question_prompt("Sets {A, B}", 2)
    assert '"Sets {A, B}"' in prompt
