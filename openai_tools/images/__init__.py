"""Image generation, edits and variations."""

from openai_tools.images.request import Images
