# -*- coding: utf-8 -*-
"""Users — per-user records in the flat-file store."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..store import read_db, transaction
from .models import SymptomLog, UserProfile

logger = logging.getLogger(__name__)


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def _empty_record() -> Dict[str, Any]:
    return {"userProfile": None, "symptoms": []}


def _profile_of(record: Dict[str, Any]) -> Optional[UserProfile]:
    raw = record.get("userProfile")
    return UserProfile.model_validate(raw) if raw else None


def _symptoms_of(record: Dict[str, Any]) -> List[SymptomLog]:
    return [SymptomLog.model_validate(s) for s in record.get("symptoms") or []]


def get_or_create_user(email: str, db_path: Path | None = None) -> Dict[str, Any]:
    """Return the user's record, creating an empty one on first login.

    Existing users are served from a plain read; the document is only rewritten
    when a record is created.
    """
    record = read_db(db_path).get(email)
    if record is None:
        with transaction(db_path) as db:
            if email not in db:
                logger.info("creating user record for %s", email)
                db[email] = _empty_record()
            record = db[email]
    return {"userProfile": _profile_of(record), "symptoms": _symptoms_of(record)}


def get_user(email: str, db_path: Path | None = None) -> Optional[Dict[str, Any]]:
    record = read_db(db_path).get(email)
    if record is None:
        return None
    return {"userProfile": _profile_of(record), "symptoms": _symptoms_of(record)}


def save_profile(email: str, profile: UserProfile, db_path: Path | None = None) -> Optional[UserProfile]:
    """Overwrite the stored profile. Returns None for unknown users."""
    with transaction(db_path) as db:
        record = db.get(email)
        if record is None:
            return None
        record["userProfile"] = profile.model_dump(mode="json", by_alias=True)
        return _profile_of(record)


def append_symptom(email: str, symptom: SymptomLog, db_path: Path | None = None) -> Optional[List[SymptomLog]]:
    """Append one symptom log and return the full list. Returns None for unknown users."""
    with transaction(db_path) as db:
        record = db.get(email)
        if record is None:
            return None
        symptoms = record.setdefault("symptoms", [])
        symptoms.append(symptom.model_dump(mode="json", by_alias=True))
        return _symptoms_of(record)


def delete_user(email: str, db_path: Path | None = None) -> bool:
    with transaction(db_path) as db:
        if email not in db:
            return False
        del db[email]
    logger.info("deleted user record for %s", email)
    return True
