import logging
import re
from datetime import datetime, timezone
from typing import Optional
from fastapi import HTTPException, status
from app.core.config import settings
from app.models.user import UserCreate, UserRecord
from app.storage.csv_store import CsvStore
from app.utils.csv_utils import parse_record_line

logger = logging.getLogger(__name__)

NUMERIC_ID = re.compile(r"[0-9]+")
EMAIL_SHAPE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


class UserService:
    @staticmethod
    def validate_payload(payload: UserCreate) -> None:
        """Reject the payload with a 400 on the first failing check"""
        if not (payload.id and payload.name and payload.email and payload.role):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Missing required fields"
            )
        if not NUMERIC_ID.fullmatch(payload.id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User ID must contain only numbers"
            )
        if not EMAIL_SHAPE.fullmatch(payload.email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid email address"
            )

    @staticmethod
    def check_duplicates(store: CsvStore, user_id: str, email: str) -> Optional[str]:
        """
        Scan stored records for a conflicting id or email.

        Returns None when there is no conflict, otherwise the message to send
        back. Lines are checked in file order; within a line the id is checked
        before the email. A failed read is reported as a conflict too.
        """
        try:
            content = store.read_text()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error checking duplicates: {str(e)}")
            return "Error checking duplicates"

        email_lower = email.lower()
        # First line is the header
        for line in content.split("\n")[1:]:
            if not line:
                continue
            fields = parse_record_line(line)
            if fields[0] == user_id:
                return "User ID already exists"
            if len(fields) > 2 and fields[2] and fields[2].lower() == email_lower:
                return "Email already exists"
        return None

    @staticmethod
    def log_activity(record: UserRecord, year: Optional[str]) -> dict:
        """Log a human-readable note about the new account and return it"""
        message = f"Created new {record.role} account for {record.name} with ID {record.id}"
        if record.role == "student":
            message += f" (Year {year or settings.NOT_APPLICABLE})"
        logger.info(f"ActivityLog: {message}")
        return {"action": message, "timestamp": datetime.now(timezone.utc).isoformat()}

    def create_user(self, store: CsvStore, payload: UserCreate) -> UserRecord:
        """Validate, check for duplicates and append a new record"""
        self.validate_payload(payload)

        with store.lock:
            duplicate_error = self.check_duplicates(store, payload.id, payload.email)
            if duplicate_error:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=duplicate_error
                )

            record = UserRecord.from_payload(payload)
            store.append_row(record.to_row())

        logger.info(f"Appended user {record.id} to {store.file_path.name}")
        self.log_activity(record, payload.year)
        return record


user_service = UserService()
