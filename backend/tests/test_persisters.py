"""Tests for the per-type persisters."""

from dataclasses import replace
from datetime import UTC, datetime

import pytest

from vaultforge.errors import InvalidObject
from vaultforge.models import FolderRevision, Password, PasswordRevision, TagRevision
from vaultforge.persistence import (
    FolderRevisionMapper,
    PasswordMapper,
    PasswordRevisionMapper,
    TagRevisionMapper,
)
from vaultforge.services import ModelPersister, RevisionPersister, password_hash

NOW = "2024-05-01T12:00:00+00:00"


def fixed_clock():
    return datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


class ReverseCipher:
    """Toy cipher: reverses the secret fields."""

    def encrypt(self, revision):
        return replace(revision, password=revision.password[::-1], notes=revision.notes[::-1])

    def decrypt(self, revision):
        return self.encrypt(revision)


def revision(**fields):
    fields.setdefault("uuid", "R1")
    fields.setdefault("model", "P1")
    fields.setdefault("user_id", "alice")
    return PasswordRevision(**fields)


class TestPasswordHash:
    def test_sha1_hex(self):
        assert password_hash("secret") == "e5e9fa1ba31ecd1ae84f75caaa474f3a663f05f4"

    def test_empty(self):
        assert password_hash("") == ""


class TestModelPersister:
    def test_insert_sets_timestamps(self, engine):
        persister = ModelPersister(PasswordMapper(engine), clock=fixed_clock)
        password = persister.save(Password(uuid="P1", user_id="alice"))

        assert password.id is not None
        assert password.created_at == NOW
        assert password.updated_at == NOW

    def test_insert_keeps_given_timestamps(self, engine):
        persister = ModelPersister(PasswordMapper(engine), clock=fixed_clock)
        password = persister.save(
            Password(uuid="P1", user_id="alice", created_at="2020-01-01T00:00:00+00:00")
        )
        assert password.created_at == "2020-01-01T00:00:00+00:00"

    def test_update_bumps_updated_at(self, engine):
        mapper = PasswordMapper(engine)
        stored = mapper.insert(
            Password(uuid="P1", user_id="alice", created_at="old", updated_at="old")
        )
        stored.deleted = True

        ModelPersister(mapper, clock=fixed_clock).save(stored)

        reloaded = mapper.find_by_uuid("P1")
        assert reloaded.deleted is True
        assert reloaded.created_at == "old"
        assert reloaded.updated_at == NOW

    def test_hard_delete(self, engine):
        mapper = PasswordMapper(engine)
        persister = ModelPersister(mapper)
        password = persister.save(Password(uuid="P1", user_id="alice"))

        persister.hard_delete(password)

        assert mapper.find_all() == []


class TestRevisionPersister:
    def test_hash_computed_on_insert(self, engine):
        persister = RevisionPersister(PasswordRevisionMapper(engine))
        stored = persister.save(revision(password="secret", hash="stale"))

        assert stored.hash == password_hash("secret")

    def test_edited_defaults_to_now(self, engine):
        persister = RevisionPersister(PasswordRevisionMapper(engine), clock=fixed_clock)
        assert persister.save(revision()).edited == NOW

    def test_edited_kept_when_given(self, engine):
        persister = RevisionPersister(PasswordRevisionMapper(engine), clock=fixed_clock)
        assert persister.save(revision(edited="yesterday")).edited == "yesterday"

    def test_update_writes_state_only(self, engine):
        mapper = PasswordRevisionMapper(engine)
        persister = RevisionPersister(mapper, clock=fixed_clock)
        stored = persister.save(revision(label="Mail", created_at="old", updated_at="old"))
        stored.deleted = True
        stored.label = "Changed"
        stored.cse_type = "bogus"

        persister.save(stored)

        reloaded = mapper.find_by_uuid("R1")
        assert reloaded.deleted is True
        assert reloaded.updated_at == NOW
        assert reloaded.label == "Mail"
        assert reloaded.cse_type == "none"

    @pytest.mark.parametrize(
        ("fields", "message"),
        [
            ({"model": ""}, "no parent object"),
            ({"user_id": ""}, "no owner"),
            ({"label": "x" * 257}, "Label exceeds 256"),
            ({"cse_type": "CSEv9"}, "client side encryption type 'CSEv9'"),
            ({"sse_type": "SSEv9"}, "server side encryption type 'SSEv9'"),
        ],
    )
    def test_validation(self, engine, fields, message):
        persister = RevisionPersister(PasswordRevisionMapper(engine))

        with pytest.raises(InvalidObject, match=message):
            persister.save(revision(**fields))

    def test_label_at_limit(self, engine):
        persister = RevisionPersister(PasswordRevisionMapper(engine))
        assert persister.save(revision(label="x" * 256)).id is not None

    def test_folder_cannot_be_own_parent(self, engine):
        persister = RevisionPersister(FolderRevisionMapper(engine))

        with pytest.raises(InvalidObject, match="own parent"):
            persister.save(FolderRevision(uuid="R1", model="F1", user_id="alice", parent="F1"))

    def test_non_password_revision_has_no_hash(self, engine):
        persister = RevisionPersister(TagRevisionMapper(engine))
        stored = persister.save(TagRevision(uuid="R1", model="T1", user_id="alice", color="#fff"))
        assert stored.id is not None


class TestCipher:
    def test_stored_encrypted_caller_keeps_plaintext(self, engine):
        mapper = PasswordRevisionMapper(engine)
        persister = RevisionPersister(mapper, cipher=ReverseCipher(), clock=fixed_clock)

        stored = persister.save(revision(password="secret", notes="hi"))

        assert stored.password == "secret"
        assert stored.id is not None
        assert stored.created_at == NOW
        raw = mapper.find_by_uuid("R1")
        assert raw.password == "terces"
        assert raw.notes == "ih"

    def test_hash_is_of_plaintext(self, engine):
        mapper = PasswordRevisionMapper(engine)
        persister = RevisionPersister(mapper, cipher=ReverseCipher())

        persister.save(revision(password="secret"))

        assert mapper.find_by_uuid("R1").hash == password_hash("secret")

    def test_saving_decrypted_copy_keeps_ciphertext(self, engine):
        mapper = PasswordRevisionMapper(engine)
        cipher = ReverseCipher()
        persister = RevisionPersister(mapper, cipher=cipher)
        persister.save(revision(password="secret", notes="hi"))

        plain = cipher.decrypt(mapper.find_by_uuid("R1"))
        assert plain.password == "secret"
        plain.deleted = True
        persister.save(plain)

        raw = mapper.find_by_uuid("R1")
        assert raw.deleted is True
        assert raw.password == "terces"
        assert raw.notes == "ih"
