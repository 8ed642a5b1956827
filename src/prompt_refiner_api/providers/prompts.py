"""System instructions and request messages sent to LLM providers."""

from prompt_refiner_api.models.answer import NOT_ANSWERED, Answer
from prompt_refiner_api.models.question import Question

GENERATION_SYSTEM_PROMPT = """You are a prompt refinement assistant. Your task is to generate targeted questions with 3 options that will help users refine their initial prompts into more specific and effective versions.

When generating questions, focus on:
1. Clarity of intent - What exactly does the user want to achieve?
2. Specificity - What specific details, constraints, or parameters are needed?
3. Context - What is the target audience, use case, or environment?
4. Constraints - Are there any limitations, requirements, or preferred formats?

Generate 5-7 questions that are:
- Clear and unambiguous
- Have exactly 3 meaningful options
- Progressive (building on each other)
- Impactful for prompt refinement

For each question, provide 3 options that can be:
- Yes/No/Maybe (for binary questions with uncertainty)
- Low/Medium/High (for degree or intensity)
- Basic/Detailed/Comprehensive (for depth level)
- Creative/Balanced/Analytical (for approach type)
- Or any other relevant 3-option scale

The middle option (index 1) should be the default/neutral choice.

Return the questions in JSON format with the following structure:
{
  "questions": [
    {
      "text": "Question text here",
      "category": "clarity|specificity|context|constraints",
      "impact": "high|medium|low",
      "explanation": "Brief explanation of why this question matters",
      "options": ["Option 1", "Option 2", "Option 3"],
      "defaultOption": 1
    }
  ]
}"""

# Some hosted open models wrap JSON in commentary or markdown unless told not to.
STRICT_JSON_GENERATION_SYSTEM_PROMPT = """You are a prompt refinement assistant. Your task is to generate targeted questions that help users refine their prompts.

CRITICAL: You MUST respond with ONLY valid JSON in the exact format shown below. Do not include any markdown formatting, explanations, or additional text.

Generate 5-7 questions focusing on:
1. Clarity of intent
2. Specificity of requirements
3. Context and audience
4. Constraints and limitations

Each question must have exactly 3 meaningful options where the middle option (index 1) is the default.

RESPOND WITH ONLY THIS JSON FORMAT:
{
  "questions": [
    {
      "text": "What level of detail should the response include?",
      "category": "specificity",
      "impact": "high",
      "explanation": "Determines the depth and comprehensiveness needed",
      "options": ["Basic overview", "Detailed explanation", "Comprehensive guide"],
      "defaultOption": 1
    }
  ]
}

Remember:
- ONLY return valid JSON
- NO markdown code blocks
- NO additional text or explanations
- Exactly 3 options per question
- Categories: "clarity", "specificity", "context", "constraints"
- Impact levels: "high", "medium", "low"
"""

REFINEMENT_SYSTEM_PROMPT = """You are a prompt refinement assistant. Your task is to take the user's original prompt and their answers to targeted questions, then create a refined, more specific version of the prompt.

Guidelines for refinement:
1. Preserve the original intent and core purpose
2. Add specific details based on the user's answers
3. Improve clarity and reduce ambiguity
4. Include relevant constraints or parameters
5. Make the prompt more actionable and specific

The refined prompt should be:
- Clear and specific
- Actionable
- Well-structured
- Preserving the original voice and style when possible

Return only the refined prompt text, without any additional commentary or formatting."""

GENERATION_REQUEST = """Please generate {max_questions} targeted questions with 3 options each to help refine this prompt:

"{prompt}"

Remember to focus on clarity, specificity, context, and constraints. Each question should have exactly 3 meaningful options with the middle option as the default."""

REFINEMENT_REQUEST = """Original prompt: "{original_prompt}"

Questions and answers:
{transcript}

Please create a refined version of the original prompt based on these answers."""


def build_generation_request(prompt: str, max_questions: int) -> str:
    """Build the user message asking for questions about ``prompt``."""
    return GENERATION_REQUEST.format(max_questions=max_questions, prompt=prompt)


def format_transcript(questions: list[Question], answers: list[Answer]) -> str:
    """Render questions paired with their answers, in question order.

    Questions without a recorded answer render as "Not answered".

    Args:
        questions: The question set the answers were given against.
        answers: Recorded answers, matched by question id.

    Returns:
        ``Q: ...`` / ``A: ...`` blocks separated by blank lines.
    """
    answers_by_question = {answer.question_id: answer for answer in answers}
    blocks = []
    for question in sorted(questions, key=lambda q: q.order):
        answer = answers_by_question.get(question.id)
        answer_text = answer.display_text() if answer else NOT_ANSWERED
        blocks.append(f"Q: {question.text}\nA: {answer_text}")
    return "\n\n".join(blocks)


def build_refinement_request(
    original_prompt: str, questions: list[Question], answers: list[Answer]
) -> str:
    """Build the user message asking for a refined prompt."""
    return REFINEMENT_REQUEST.format(
        original_prompt=original_prompt,
        transcript=format_transcript(questions, answers),
    )
