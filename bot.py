import os
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO, Optional

import requests
from telebot import TeleBot, apihelper

logger = logging.getLogger(__name__)


class UploadError(Exception):
    """Base class for every fatal upload failure."""


class MissingArgument(UploadError):
    pass


class FileNotFound(UploadError):
    pass


class FileOpenFailure(UploadError):
    pass


class AuthInitFailure(UploadError):
    pass


class RemoteSendFailure(UploadError):
    pass


@dataclass(frozen=True)
class Attachment:
    name: str
    content: Optional[BinaryIO] = None
    path: Optional[str] = None

    @classmethod
    def from_path(cls, path, content=None):
        """Name the attachment after the last segment of path."""
        return cls(name=os.path.basename(path), content=content,
                   path=None if content is not None else path)


class Sender(ABC):
    """Something that can deliver a document to a chat and return its message id."""

    @abstractmethod
    def send(self, user_id: int, attachment: Attachment) -> int:
        ...


# ===========================
# Telegram
# ===========================
def setup_api(api_url=None):
    # Failures are fatal for the uploader; never let telebot retry on its own.
    apihelper.RETRY_ON_ERROR = False
    if api_url:
        apihelper.API_URL = api_url
        logger.info(f"Using Bot API endpoint {api_url}")


class TelegramSender(Sender):
    def __init__(self, token, api_url=None, timeout=None):
        setup_api(api_url)
        self.timeout = timeout
        try:
            self.bot = TeleBot(token)
            me = self.bot.get_me()
        except (ValueError, apihelper.ApiException, requests.exceptions.RequestException) as e:
            raise AuthInitFailure(f"Error initializing bot: {e}") from e
        logger.info(f"Authorized on account {me.username}")

    def _send_document(self, user_id, document, name):
        kwargs = {"visible_file_name": name}
        if self.timeout:
            kwargs["timeout"] = self.timeout
        try:
            return self.bot.send_document(user_id, document, **kwargs)
        except (apihelper.ApiException, requests.exceptions.RequestException) as e:
            raise RemoteSendFailure(f"Error sending file: {e}") from e

    def send(self, user_id, attachment):
        if attachment.content is not None:
            message = self._send_document(user_id, attachment.content, attachment.name)
        else:
            try:
                f = open(attachment.path, "rb")
            except OSError as e:
                raise FileOpenFailure(f"Error opening file: {e}") from e
            with f:
                message = self._send_document(user_id, f, attachment.name)
        logger.info(f"Document {attachment.name} delivered as message {message.message_id}")
        return message.message_id
