# CLI uploader that sends one local file to a Telegram chat as a document
import os, sys, argparse, logging
from dataclasses import dataclass

from config import Config
from bot import (UploadError, MissingArgument, FileNotFound, FileOpenFailure,
                 AuthInitFailure, RemoteSendFailure, Attachment, TelegramSender)
from progress import ProgressReader, progress_bar

__all__ = [
    "UploadError", "MissingArgument", "FileNotFound", "FileOpenFailure",
    "AuthInitFailure", "RemoteSendFailure", "UploadRequest",
    "build_parser", "parse_request", "stat_file", "open_file", "upload", "main",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadRequest:
    token: str
    user_id: int
    file_path: str
    progress: bool = True


class UsageParser(argparse.ArgumentParser):
    """ArgumentParser that reports bad input on stdout and exits with status 1."""

    def error(self, message):
        print(f"Error: {message}")
        self.print_help()
        sys.exit(1)


def build_parser():
    p = UsageParser(prog="tg-upload",
                    description="Send a local file to a Telegram chat as a document.")
    p.add_argument("--token", default="", help="Telegram Bot Token")
    p.add_argument("--user", type=int, default=0, help="Target User ID (Chat ID)")
    p.add_argument("--file", default="", help="Path to the file to send")
    p.add_argument("--no-progress", dest="progress", action="store_false",
                   help="hand the path to the bot client and skip the progress bar")
    return p


def parse_request(argv=None, parser=None):
    parser = parser or build_parser()
    args = parser.parse_args(argv)
    for flag in ("token", "user", "file"):
        if not getattr(args, flag):
            raise MissingArgument(f"Error: --{flag} is required")
    return UploadRequest(token=args.token, user_id=args.user,
                         file_path=args.file, progress=args.progress)


def stat_file(path):
    """Return the size of path in bytes."""
    try:
        return os.stat(path).st_size
    except FileNotFoundError as e:
        raise FileNotFound(f"Error: File does not exist at path: {path}") from e
    except OSError as e:
        raise FileOpenFailure(f"Error opening file: {e}") from e


def open_file(path):
    try:
        return open(path, "rb")
    except OSError as e:
        raise FileOpenFailure(f"Error opening file: {e}") from e


def telegram_sender(token):
    return TelegramSender(token, api_url=Config.TELEGRAM_API_URL, timeout=Config.UPLOAD_TIMEOUT)


def upload(request, sender_factory=telegram_sender):
    """Send request.file_path to request.user_id and return the new message id.

    The progress variant opens the file here and streams it through a
    ProgressReader; the plain variant leaves opening the path to the sender.
    """
    size = stat_file(request.file_path)

    if not request.progress:
        sender = sender_factory(request.token)
        print(f"Sending file {request.file_path} to user {request.user_id}...")
        return sender.send(request.user_id, Attachment.from_path(request.file_path))

    with open_file(request.file_path) as f:
        sender = sender_factory(request.token)
        print(f"Sending file {request.file_path} ({size} bytes) to user {request.user_id}...")
        # Closing the bar ends its line before anything else is printed.
        with progress_bar(size) as bar:
            reader = ProgressReader(f, size, bar)
            attachment = Attachment.from_path(request.file_path, content=reader)
            return sender.send(request.user_id, attachment)


def main(argv=None, sender_factory=telegram_sender):
    logging.basicConfig(level=Config.LOG_LEVEL,
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    parser = build_parser()
    try:
        request = parse_request(argv, parser)
    except MissingArgument as e:
        print(e)
        parser.print_help()
        sys.exit(1)

    try:
        message_id = upload(request, sender_factory)
    except UploadError as e:
        logger.error(str(e))
        sys.exit(1)

    print(f"File sent successfully! Message ID: {message_id}")


if __name__ == "__main__":
    main()
