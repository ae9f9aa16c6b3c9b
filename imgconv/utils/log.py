"""
Timestamped console logging.
"""
import sys
import datetime

# Optional function that receives every formatted message
_log_callback = None


def set_log_callback(callback):
    """Set a callback that receives every formatted log message.

    Args:
        callback: Function taking a single string, or None to disable
    """
    global _log_callback
    _log_callback = callback


def format_message(message):
    """Prefix a message with the current time."""
    timestamp = datetime.datetime.now().strftime("%H:%M:%S")
    return f"[{timestamp}] {message}"


def _emit(formatted_message, stream):
    print(formatted_message, file=stream)
    if _log_callback:
        _log_callback(formatted_message)


def log(message):
    """Log an informational message to stdout"""
    _emit(format_message(message), sys.stdout)


def warn(message):
    """Log a warning to stderr"""
    _emit(format_message(f"WARNING: {message}"), sys.stderr)


def error(message):
    """Log an error to stderr"""
    _emit(format_message(f"Error: {message}"), sys.stderr)
