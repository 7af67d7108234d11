"""
Prompt template for NEET-PG style MCQ generation.

Design goals
- Exam-grade items: NEET-PG / AIIMS / USMLE level, mostly hard
- One fixed JSON shape the front end can render without post-processing
- JSON only: the reply is parsed directly, prose around it is an error
"""

# Literal JSON braces are doubled for str.format.
QUESTION_PROMPT_TEMPLATE = (
    "You are an expert NEET-PG question setter and medical educator.\n\n"
    'Generate {count} high-quality multiple-choice questions (MCQs) for the topic: "{topic}".\n\n'
    "Requirements:\n"
    "- Difficulty: NEET-PG / AIIMS / USMLE-level.\n"
    "- Include a mix of conceptual, clinical, and case-based questions.\n"
    "- Include both medium (30%) and hard (70%) conceptual mixes (100% hard-creative).\n"
    "- Each question must have 4 options (A–D).\n"
    "- Include a detailed explanation for the correct answer.\n"
    "- Output MUST be strictly valid JSON in the following structure:\n\n"
    "{{\n"
    '  "topic": "{topic}",\n'
    '  "questions": [\n'
    "    {{\n"
    '      "serial": 1,\n'
    '      "question": "Question text",\n'
    '      "options": {{\n'
    '        "A": "Option A",\n'
    '        "B": "Option B",\n'
    '        "C": "Option C",\n'
    '        "D": "Option D"\n'
    "      }},\n"
    '      "correct_answer": {{\n'
    '        "option": "A",\n'
    '        "text": "Correct option text"\n'
    "      }},\n"
    '      "explanation": "Detailed explanation with reasoning for correct and incorrect answers."\n'
    "    }},\n"
    "    ...\n"
    "  ]\n"
    "}}\n\n"
    "Do NOT include any text outside the JSON (no markdown, no commentary).\n"
)


def build_question_prompt(topic: str, count: int) -> str:
    """Fill the MCQ template for one topic."""
    return QUESTION_PROMPT_TEMPLATE.format(topic=topic, count=count)
