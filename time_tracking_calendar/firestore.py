"""Shared Firestore client helper."""
from __future__ import annotations

import logging
import os

import firebase_admin
from firebase_admin import firestore
from google.auth.exceptions import DefaultCredentialsError

logger = logging.getLogger(__name__)

_firestore_client = None


def get_firestore_client():
    """Return a cached Firestore client, or None when no credentials exist."""

    global _firestore_client
    if _firestore_client is not None:
        return _firestore_client

    try:
        if not firebase_admin._apps:
            options = {}
            project_id = os.getenv("TTC_FIREBASE_PROJECT_ID")
            if project_id:
                options["projectId"] = project_id
            firebase_admin.initialize_app(options=options or None)
        _firestore_client = firestore.client()
    except (DefaultCredentialsError, ValueError) as exc:
        logger.warning("Firestore unavailable, using local file storage: %s", exc)
        return None
    return _firestore_client
