"""Test configuration and fixtures."""

import io

import pytest

from docsegment.config.loader import load_config_from_string


class TrackingStream(io.StringIO):
    """StringIO that counts how often it is closed."""

    def __init__(self, text: str = ""):
        super().__init__(text)
        self.close_count = 0

    def close(self):
        self.close_count += 1
        super().close()


class FailingStream(io.StringIO):
    """Stream whose reads fail after the first line."""

    def __init__(self, text: str = ""):
        super().__init__(text)
        self.reads = 0
        self.close_count = 0

    def readline(self, *args):
        self.reads += 1
        if self.reads > 1:
            raise OSError("disk went away")
        return super().readline(*args)

    def read(self, *args):
        raise OSError("disk went away")

    def close(self):
        self.close_count += 1
        super().close()


@pytest.fixture
def tracking_stream():
    """Factory for close-counting streams."""
    return TrackingStream


@pytest.fixture
def failing_stream():
    """Factory for streams that fail while reading."""
    return FailingStream


@pytest.fixture
def sample_config_yaml():
    """Provide a sample config YAML for testing."""
    return """
sentence_delimiters: [".", "?", "!", ";"]
tag_delimiter: "_"
element_filter: "s|p"
tokenizer: whitespace
tokenizer_options: ""
escaper: ptb
keep_empty_sentences: false
"""


@pytest.fixture
def sample_config(sample_config_yaml):
    """Provide a loaded config object for testing."""
    return load_config_from_string(sample_config_yaml)


@pytest.fixture
def temp_config_file(sample_config_yaml, tmp_path):
    """Provide a temporary config file for testing."""
    path = tmp_path / "docsegment.yaml"
    path.write_text(sample_config_yaml, encoding="utf-8")
    return path


class SimpleTestLogger:
    """Simple logger for testing that captures messages."""

    def __init__(self):
        self.messages = []

    def info(self, msg: str, **kv):
        self.messages.append(('info', msg, kv))

    def warn(self, msg: str, **kv):
        self.messages.append(('warn', msg, kv))

    def error(self, msg: str, **kv):
        self.messages.append(('error', msg, kv))

    def clear(self):
        """Clear captured messages."""
        self.messages.clear()


class SimpleTestMeter:
    """Meter for testing that records counters and observations."""

    def __init__(self):
        self.counters = {}
        self.observations = []

    def inc(self, name: str, amount: int = 1, **tags):
        self.counters[name] = self.counters.get(name, 0) + amount

    def observe(self, name: str, value: float, **tags):
        self.observations.append((name, value))


@pytest.fixture
def test_logger():
    """Provide a test logger that captures messages."""
    return SimpleTestLogger()


@pytest.fixture
def test_meter():
    """Provide a test meter that captures metrics."""
    return SimpleTestMeter()
