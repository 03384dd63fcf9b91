"""
Crash logging for the mimeapps command line tool
Appends unhandled exceptions with timestamps and stack traces to a log file.
"""
import sys
import traceback
from datetime import datetime
from pathlib import Path


class CrashLogger:
    """Logger for fatal crashes and exceptions"""

    LOG_DIR = Path.home() / ".local" / "share" / "mimeapps"
    LOG_FILE = LOG_DIR / "crash.log"
    MAX_LOG_SIZE = 5 * 1024 * 1024  # 5 MB
    ENTRY_MARKER = "FATAL ERROR -"

    @classmethod
    def setup(cls):
        """Create the log directory, falling back to the current directory"""
        try:
            cls.LOG_DIR.mkdir(parents=True, exist_ok=True)
        except OSError:
            cls.LOG_DIR = Path.cwd()
            cls.LOG_FILE = cls.LOG_DIR / "crash.log"

    @classmethod
    def format_entry(cls, exc_type, exc_value, exc_traceback) -> str:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        separator = "=" * 80

        lines = [
            "",
            separator,
            f"{cls.ENTRY_MARKER} {timestamp}",
            separator,
            f"Command: {' '.join(sys.argv)}",
            f"Exception Type: {exc_type.__name__}",
            f"Exception Message: {exc_value}",
            "",
            "Stack Trace:",
        ]
        entry = "\n".join(lines) + "\n"
        entry += "".join(traceback.format_exception(exc_type, exc_value, exc_traceback))
        return entry + separator + "\n"

    @classmethod
    def log_exception(cls, exc_type, exc_value, exc_traceback):
        """Write an exception to the log file and to stderr.

        Args:
            exc_type: Exception type
            exc_value: Exception instance
            exc_traceback: Exception traceback
        """
        entry = cls.format_entry(exc_type, exc_value, exc_traceback)
        try:
            cls.setup()
            cls._rotate_log_if_needed()
            with open(cls.LOG_FILE, 'a', encoding='utf-8') as f:
                f.write(entry)
        except OSError as e:
            print(f"Failed to write crash log: {e}", file=sys.stderr)
        else:
            print(f"\nFATAL ERROR logged to: {cls.LOG_FILE}", file=sys.stderr)
        print(entry, file=sys.stderr)

    @classmethod
    def _rotate_log_if_needed(cls):
        """Move the log aside to crash.log.old once it exceeds MAX_LOG_SIZE"""
        if not cls.LOG_FILE.exists() or cls.LOG_FILE.stat().st_size <= cls.MAX_LOG_SIZE:
            return
        backup_file = cls.LOG_FILE.with_suffix('.log.old')
        cls.LOG_FILE.replace(backup_file)

    @classmethod
    def install_exception_handler(cls):
        """Install the crash logger as the global exception handler"""
        sys.excepthook = cls.log_exception

    @classmethod
    def get_log_path(cls) -> str:
        cls.setup()
        return str(cls.LOG_FILE)

    @classmethod
    def count_entries(cls) -> int:
        if not cls.LOG_FILE.exists():
            return 0
        return cls.LOG_FILE.read_text(encoding='utf-8').count(cls.ENTRY_MARKER)

    @classmethod
    def clear_log(cls):
        """Delete the crash log file"""
        if cls.LOG_FILE.exists():
            cls.LOG_FILE.unlink()
