import pytest

from bot import Sender
from config import Config


class FakeSender(Sender):
    """In-memory sender that consumes the attachment the way the bot client would."""

    def __init__(self, token, message_id=999, error=None):
        self.token = token
        self.message_id = message_id
        self.error = error
        self.calls = []

    def send(self, user_id, attachment):
        payload = attachment.content.read() if attachment.content is not None else None
        self.calls.append({"user_id": user_id, "attachment": attachment, "payload": payload})
        if self.error is not None:
            raise self.error
        return self.message_id


class SenderFactory:
    """Builds FakeSenders and remembers them so tests can inspect the calls."""

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.senders = []

    def __call__(self, token):
        sender = FakeSender(token, **self.kwargs)
        self.senders.append(sender)
        return sender

    @property
    def calls(self):
        return [call for sender in self.senders for call in sender.calls]


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    monkeypatch.setattr(Config, "TELEGRAM_API_URL", None)
    monkeypatch.setattr(Config, "UPLOAD_TIMEOUT", None)


@pytest.fixture
def notes_file(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_bytes(b"0123456789")
    return path


@pytest.fixture
def make_factory():
    return SenderFactory
