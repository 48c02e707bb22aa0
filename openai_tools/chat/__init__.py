"""Chat completions: the ``ChatCompletion`` builder and its response models."""

from openai_tools.chat.request import ChatCompletion
from openai_tools.chat.response import ChatCompletionResponse
