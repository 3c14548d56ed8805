"""
Prompt templates for the solution generator.
"""

# Generation parameters for solution requests
SOLUTION_TEMPERATURE: float = 0.3
SOLUTION_MAX_OUTPUT_TOKENS: int = 8192

# Probe parameters
PROBE_PROMPT = "Hello, respond with 'API connected successfully'"
PROBE_MAX_OUTPUT_TOKENS: int = 100

SOLUTION_PROMPT_TEMPLATE = """You are an expert tutor. Analyze the following question paper and provide detailed, step-by-step solutions for each question. Format your response in markdown with clear headings and explanations.

Question Paper:
{question_text}

Please provide:
1. Clear identification of each question
2. Step-by-step solution methodology
3. Final answers where applicable
4. Explanations of key concepts used

Format the response professionally with proper markdown formatting."""


def build_solution_prompt(question_text: str) -> str:
    """Embed the question paper in the tutoring template."""
    return SOLUTION_PROMPT_TEMPLATE.format(question_text=question_text)
