"""Fine-tuning jobs."""

from openai_tools.fine_tuning.request import FineTuning, fine_tuning_method
