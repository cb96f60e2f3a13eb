"""
Image describers: turn raw image bytes into a natural-language description.

Two interchangeable backends share the ``ImageDescriber`` interface:

- ``RekognitionLabelDescriber`` lists the labels AWS Rekognition detects above a
  confidence floor. Deterministic for a given detector output.
- ``OpenAIVisionDescriber`` asks a multimodal chat model for a short objective
  description. Output varies between calls.

Both raise ``DescriptionError`` when the backend fails or returns nothing usable.
"""

import base64
import logging
from abc import ABC, abstractmethod

import openai
from botocore.exceptions import BotoCoreError, ClientError
from langsmith import traceable

from post_image_processor.errors import DescriptionError

logger = logging.getLogger(__name__)

VISION_SYSTEM_PROMPT = (
    "You are an assistant that describes images objectively and concisely."
)
VISION_USER_PROMPT = "Briefly describe the content and context of this image:"


class ImageDescriber(ABC):
    """Abstract base class for image description backends"""

    @abstractmethod
    def describe(self, image_bytes: bytes) -> str:
        """Return a non-empty description of the image"""
        ...


class RekognitionLabelDescriber(ImageDescriber):
    def __init__(self, rekognition_client, max_labels: int = 10, min_confidence: float = 75.0):
        self.client = rekognition_client
        self.max_labels = max_labels
        self.min_confidence = min_confidence

    @traceable(name="rekognition_describe")
    def describe(self, image_bytes: bytes) -> str:
        try:
            response = self.client.detect_labels(
                Image={"Bytes": image_bytes},
                MaxLabels=self.max_labels,
                MinConfidence=self.min_confidence,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Rekognition detect_labels failed: {str(e)}")
            raise DescriptionError(f"Label detection failed: {e}", cause=e) from e

        try:
            names = [label["Name"] for label in response.get("Labels", [])]
        except (KeyError, TypeError) as e:
            raise DescriptionError(f"Malformed Rekognition response: {e}", cause=e) from e

        if not names:
            raise DescriptionError(
                f"No labels detected above {self.min_confidence}% confidence"
            )

        description = f"Image contains: {', '.join(names).lower()}."
        logger.info(f"Image description: {description}")
        return description


class OpenAIVisionDescriber(ImageDescriber):
    def __init__(self, openai_client, model: str = "gpt-4o-mini", media_type: str = "image/jpeg"):
        self.client = openai_client
        self.model = model
        self.media_type = media_type

    @traceable(name="openai_vision_describe")
    def describe(self, image_bytes: bytes) -> str:
        image_b64 = base64.b64encode(image_bytes).decode("ascii")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": VISION_SYSTEM_PROMPT},
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": VISION_USER_PROMPT},
                            {
                                "type": "image_url",
                                "image_url": {"url": f"data:{self.media_type};base64,{image_b64}"},
                            },
                        ],
                    },
                ],
            )
        except openai.OpenAIError as e:
            logger.error(f"OpenAI vision request failed: {str(e)}")
            raise DescriptionError(f"Vision model request failed: {e}", cause=e) from e

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError) as e:
            raise DescriptionError(f"Malformed vision model response: {e}", cause=e) from e

        description = (content or "").strip()
        if not description:
            raise DescriptionError("Vision model returned an empty description")

        logger.info(f"Image description: {description}")
        return description
