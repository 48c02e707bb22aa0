"""Responses API: the ``Responses`` builder and the ``Response`` model."""

from openai_tools.responses.request import Responses
from openai_tools.responses.response import Response
