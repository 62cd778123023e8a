"""nestify -- scaffold NestJS applications from a short questionnaire."""

__version__ = "0.1.0"
