"""Gateway that transcribes uploaded audio and publishes the text to RabbitMQ."""

__version__ = "0.1.0"
