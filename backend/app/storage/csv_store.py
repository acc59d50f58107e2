import logging
import threading
from pathlib import Path
from typing import Sequence
from app.core.config import settings
from app.models.user import CSV_HEADERS
from app.utils.csv_utils import format_csv_rows

logger = logging.getLogger(__name__)


class CsvStore:
    """
    The backing CSV file: a header row followed by one quoted line per user.

    Records are only ever appended. `lock` is held by writers across the
    duplicate scan and the append so two requests in this process cannot both
    pass the scan for the same id or email.
    """

    def __init__(self, file_path: str | Path):
        self.file_path = Path(file_path)
        self.lock = threading.Lock()

    def exists(self) -> bool:
        """Check if the backing file exists"""
        return self.file_path.exists()

    def initialize(self) -> bool:
        """Create the file with the header row if it is missing. Returns True if created."""
        if self.exists():
            return False
        logger.info(f"Creating new {self.file_path.name} file")
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        # "x" mode refuses to clobber a file created since the check above
        with open(self.file_path, "x", encoding="utf-8", newline="") as f:
            f.write(format_csv_rows([CSV_HEADERS]))
        return True

    def read_text(self) -> str:
        """Read the whole file"""
        with open(self.file_path, "r", encoding="utf-8", newline="") as f:
            return f.read()

    def append_row(self, values: Sequence[str]) -> None:
        """Append one quoted record line"""
        with open(self.file_path, "a", encoding="utf-8", newline="") as f:
            f.write(format_csv_rows([values]))


csv_store = CsvStore(settings.CSV_FILE_PATH)
