"""Files API."""

from openai_tools.files.request import FilePurpose, Files
