"""
Prompt text used by the describe-and-generate flow.

`compose_prompt` is a pure function: the same (description, user_prompt)
pair always yields the same prompt.
"""

from typing import Optional

# --- DESCRIBE STEP ---
DESCRIBE_INSTRUCTION = (
    "Describe the person in the image in detail but focus on their features and details "
    "in a way that could be used to replicate only the person in an image generation model "
    "and make sure that it is concise."
)

# --- GENERATE STEP ---
PERSONA_TEMPLATE = (
    "make sure it is hyperrealistic, two people generated together, the first one is a young woman "
    "that has a symmetrical and delicate face with a warm, sun-kissed complexion. Her eyebrows are "
    "well-defined, light brown, and slightly arched. Her eyes are large, light blue, and have a "
    "wide-set appearance. They are enhanced with a black winged eyeliner, brown eyeshadow on the "
    "crease, and long, full eyelashes. Her nose is narrow and straight, with a slightly upturned tip. "
    "Her lips are full and have a prominent cupid's bow, covered in a glossy, light brown or "
    "nude-pink lipstick. She has high, defined cheekbones with a soft pink blush. Her chin is pointed. "
    "Her hair is a warm, light blonde with highlights, styled in a loose wave with a side part. . "
    "The second person is "
)

SETTING_MARKER = "the setting is / they are doing: "


def compose_prompt(description: Optional[str], user_prompt: Optional[str]) -> str:
    """
    Build the image-generation prompt from the persona template.

    Precedence: both present > user prompt only > description only > neither.
    Empty strings count as absent.

    Args:
        description (str, optional): Text extracted by the describe step.
        user_prompt (str, optional): Free text supplied by the caller.

    Returns:
        str: The composed prompt.
    """
    prompt = PERSONA_TEMPLATE
    if description and user_prompt:
        prompt += f" {description} {SETTING_MARKER}{user_prompt}"
    elif user_prompt:
        prompt += f" She is {user_prompt}."
    elif description:
        prompt += f" She is {description}."
    return prompt
