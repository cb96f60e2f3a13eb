from typing import Optional


def combine_text(caption: Optional[str], description: str) -> str:
    """Caption and generated description joined by a single space; description alone without a caption"""
    if caption:
        return f"{caption} {description}".strip()
    return description
