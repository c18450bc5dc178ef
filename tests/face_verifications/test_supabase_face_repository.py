from __future__ import annotations

from conftest import COMPANY, RecordingConnection

from src.cico.cico.face_verifications.supabase_face_verification_repository import (
    SupabaseFaceVerificationRepository,
)


def test_entry_lookup_is_scoped_to_company():
    conn = RecordingConnection()

    SupabaseFaceVerificationRepository(conn).list_for_entries(COMPANY, ["e-1", "e-2"])

    assert conn.calls[0] == ("table", "face_verifications")
    assert ("eq", "company_id", COMPANY) in conn.calls
    assert ("in_", "time_entry_id", ["e-1", "e-2"]) in conn.calls
