"""End-to-end tests for the Vault facade and the built-in cascades."""

from dataclasses import replace

import pytest

from vaultforge.errors import InvalidObject, NotFound, TypeMismatch
from vaultforge.events.objects import PasswordDeletedEvent, PasswordDestroyedEvent
from vaultforge.hooks import CascadeHooks, HookRegistry
from vaultforge.models import Password, PasswordRevision
from vaultforge.persistence import PasswordRevisionMapper
from vaultforge.services import UserContext
from vaultforge.vault import Vault, initialize


class ReverseCipher:
    def encrypt(self, revision):
        return replace(revision, password=revision.password[::-1])

    def decrypt(self, revision):
        return self.encrypt(revision)


class TestCreate:
    def test_create_password(self, alice):
        password, revision = alice.create_password(label="Mail", password="secret")

        assert password.id is not None
        assert password.revision == revision.uuid
        assert revision.model == password.uuid
        assert revision.user_id == password.user_id == "alice"
        assert alice.current_revision(password) == revision

    def test_created_timestamps_use_clock(self, alice):
        password, revision = alice.create_password(label="Mail")
        assert password.created_at == "2024-05-01T12:00:00+00:00"
        assert revision.edited == "2024-05-01T12:00:00+00:00"

    def test_unknown_field_rejected(self, alice):
        with pytest.raises(InvalidObject, match="colour"):
            alice.create_password(colour="red")

    def test_identity_field_rejected(self, alice):
        with pytest.raises(InvalidObject, match="uuid"):
            alice.create_password(uuid="forced")

    def test_system_vault_cannot_create(self, system_vault):
        with pytest.raises(InvalidObject, match="without a user"):
            system_vault.create_password(label="Mail")


class TestFolderScenario:
    def test_folder_membership_is_per_user(self, alice, bob):
        folder, _ = alice.create_folder(label="Work")
        password, _ = alice.create_password(label="Mail", folder=folder.uuid)

        assert alice.passwords.get_by_folder(folder.uuid) == [password]
        assert bob.passwords.get_by_folder(folder.uuid) == []

    def test_move_between_folders(self, alice):
        work, _ = alice.create_folder(label="Work")
        home, _ = alice.create_folder(label="Home")
        password, _ = alice.create_password(label="Mail", folder=work.uuid)

        alice.update(password, folder=home.uuid)

        assert alice.passwords.get_by_folder(work.uuid) == []
        assert [p.uuid for p in alice.passwords.get_by_folder(home.uuid)] == [password.uuid]

    def test_subfolders(self, alice):
        parent, _ = alice.create_folder(label="Work")
        child, _ = alice.create_folder(label="Servers", parent=parent.uuid)

        assert alice.folders.get_by_parent(parent.uuid) == [child]
        assert alice.folders.get_by_parent(None) == [parent]


class TestUpdate:
    def test_update_creates_new_revision(self, alice, clock):
        password, first = alice.create_password(label="Mail", password="old", folder="F1")
        clock.advance(60)

        second = alice.update(password, folder="F2", password="new")

        assert second.uuid != first.uuid
        assert second.folder == "F2"
        assert second.label == first.label
        assert second.hash != first.hash
        assert second.created_at == "2024-05-01T12:01:00+00:00"
        assert password.revision == second.uuid

    def test_history_is_kept(self, alice):
        password, first = alice.create_password(label="Mail")
        second = alice.update(password, label="Webmail")

        history = alice.password_revisions.find_by_model(password.uuid)

        assert [r.uuid for r in history] == [first.uuid, second.uuid]
        assert history[0].label == "Mail"

    def test_clone_revision_scenario(self, alice):
        _, r1 = alice.create_password(label="Mail", username="alice", folder="F1")

        r2 = alice.password_revisions.clone(r1, {"folder": "F2"})

        assert r2.folder == "F2"
        assert r2.uuid != r1.uuid
        assert (r2.label, r2.username, r2.model, r2.user_id) == (
            r1.label,
            r1.username,
            r1.model,
            r1.user_id,
        )


class TestSetRevision:
    def test_rejects_revision_of_other_object(self, alice):
        first, _ = alice.create_password(label="A")
        _, other = alice.create_password(label="B")

        with pytest.raises(InvalidObject, match="does not belong"):
            alice.passwords.set_revision(first, other)

    def test_rejects_deleted_revision(self, alice):
        password, first = alice.create_password(label="A")
        alice.update(password, label="B")
        alice.password_revisions.delete(first)

        with pytest.raises(InvalidObject, match="is deleted"):
            alice.passwords.set_revision(password, first)

    def test_rejects_wrong_entity_type(self, alice):
        folder, _ = alice.create_folder(label="Work")
        _, revision = alice.create_password(label="A")

        with pytest.raises(TypeMismatch):
            alice.passwords.set_revision(folder, revision)


class TestTags:
    def test_tag_and_browse(self, alice):
        password, _ = alice.create_password(label="Mail")
        tag, _ = alice.create_tag(label="Important", color="#ff0000")

        alice.tag_password(password, tag)

        assert alice.passwords.get_by_tag(tag.uuid) == [password]
        assert alice.tags.get_by_password(password.uuid) == [tag]

    def test_hidden_tag_exclusion(self, alice):
        password, _ = alice.create_password(label="Mail")
        tag, _ = alice.create_tag(label="Secret")

        alice.tag_password(password, tag, hidden=True)

        assert alice.passwords.get_by_tag(tag.uuid) == []
        assert alice.passwords.get_by_tag(tag.uuid, include_hidden=True) == [password]

    def test_untag(self, alice):
        password, _ = alice.create_password(label="Mail")
        tag, _ = alice.create_tag(label="Important")
        alice.tag_password(password, tag)

        alice.untag_password(password, tag)

        assert alice.passwords.get_by_tag(tag.uuid) == []
        with pytest.raises(NotFound):
            alice.untag_password(password, tag)

    def test_cannot_link_other_users_tag(self, alice, bob):
        password, _ = alice.create_password(label="Mail")
        tag, _ = bob.create_tag(label="Shared")

        with pytest.raises(InvalidObject, match="another user"):
            alice.tag_password(password, tag)


class TestDeleteAndDestroy:
    def test_delete_then_destroy_scenario(self, alice, system_vault):
        password, _ = alice.create_password(label="Mail")

        alice.passwords.delete(password)
        assert [p.uuid for p in alice.passwords.find_deleted()] == [password.uuid]

        alice.passwords.destroy(password)

        with pytest.raises(NotFound):
            alice.passwords.find_by_uuid(password.uuid)
        assert system_vault.passwords.find_deleted() == []

    def test_deleted_password_leaves_folder(self, alice):
        password, _ = alice.create_password(label="Mail", folder="F1")

        alice.passwords.delete(password)

        assert alice.passwords.get_by_folder("F1") == []
        assert alice.passwords.find_by_uuid(password.uuid).deleted is True

    def test_delete_cascades_to_relations(self, alice):
        password, _ = alice.create_password(label="Mail")
        tag, _ = alice.create_tag(label="Important")
        alice.tag_password(password, tag)

        alice.passwords.delete(password)

        assert alice.tag_relations.find_by_tag(tag.uuid) == []
        relations = alice.tag_relations.find_by_tag(tag.uuid, include_deleted=True)
        assert [r.deleted for r in relations] == [True]

    def test_tag_delete_cascades_to_relations(self, alice):
        password, _ = alice.create_password(label="Mail")
        tag, _ = alice.create_tag(label="Important")
        alice.tag_password(password, tag)

        alice.tags.delete(tag)

        assert alice.tag_relations.find_by_password(password.uuid) == []

    def test_destroy_cascades_to_revisions_and_relations(self, alice):
        password, _ = alice.create_password(label="Mail")
        alice.update(password, label="Webmail")
        tag, _ = alice.create_tag(label="Important")
        alice.tag_password(password, tag)

        alice.passwords.destroy(password)

        assert alice.password_revisions.find_by_model(password.uuid) == []
        assert alice.tag_relations.find_by_tag(tag.uuid, include_deleted=True) == []

    def test_destroy_folder_keeps_contents(self, alice):
        folder, _ = alice.create_folder(label="Work")
        password, _ = alice.create_password(label="Mail", folder=folder.uuid)

        alice.folders.destroy(folder)

        assert alice.folder_revisions.find_by_model(folder.uuid) == []
        assert alice.passwords.find_by_uuid(password.uuid).deleted is False

    def test_destroy_tag(self, alice):
        password, _ = alice.create_password(label="Mail")
        tag, _ = alice.create_tag(label="Important")
        alice.tag_password(password, tag)

        alice.tags.destroy(tag)

        assert alice.tag_revisions.find_by_model(tag.uuid) == []
        assert alice.tag_relations.find_by_password(password.uuid, include_deleted=True) == []
        assert alice.tags.find_all() == []

    def test_events_reach_subscribers(self, alice, bus):
        received = []
        bus.subscribe(PasswordDeletedEvent, lambda event: received.append("deleted"))
        bus.subscribe(PasswordDestroyedEvent, lambda event: received.append("destroyed"))
        password, _ = alice.create_password(label="Mail")

        alice.passwords.destroy(password)

        assert received == ["deleted", "destroyed"]


class TestPurge:
    def test_purges_every_user(self, alice, bob, system_vault):
        mine, _ = alice.create_password(label="Mail")
        theirs, _ = bob.create_password(label="Bank")
        kept, _ = bob.create_password(label="Shop")
        alice.passwords.delete(mine)
        bob.passwords.delete(theirs)

        destroyed = system_vault.purge_deleted()

        assert destroyed == 2
        assert [p.uuid for p in bob.passwords.find_all()] == [kept.uuid]
        assert alice.passwords.find_all() == []
        assert alice.password_revisions.find_by_model(mine.uuid) == []

    def test_purges_deleted_revisions(self, alice, system_vault):
        password, first = alice.create_password(label="Mail")
        alice.update(password, label="Webmail")
        alice.password_revisions.delete(first)

        assert system_vault.purge_deleted() == 1
        assert len(alice.password_revisions.find_by_model(password.uuid)) == 1

    def test_nothing_to_purge(self, system_vault):
        assert system_vault.purge_deleted() == 0


class TestServiceLookup:
    def test_service_for(self, alice):
        assert alice.service_for(Password()) is alice.passwords
        assert alice.service_for(PasswordRevision()) is alice.password_revisions

    def test_service_for_unknown(self, alice):
        with pytest.raises(KeyError):
            alice.service_for(object())


class TestInitialize:
    def test_reinitialize_does_not_double_cascade(self, engine, bus, alice):
        initialize(engine, bus)

        assert len(HookRegistry.listeners("Password", "postDelete")) == 1
        assert isinstance(CascadeHooks._active, CascadeHooks)


class TestCipher:
    def test_reads_are_decrypted(self, engine, bus, system_vault):
        vault = Vault(engine, UserContext(user_id="alice"), event_bus=bus, cipher=ReverseCipher())
        password, _ = vault.create_password(label="Mail", password="secret")

        assert vault.current_revision(password).password == "secret"
        raw = system_vault.password_revisions.find_current(password)
        assert raw.password == "terces"

    def test_deleting_old_revision_keeps_ciphertext(self, engine, bus, system_vault):
        vault = Vault(engine, UserContext(user_id="alice"), event_bus=bus, cipher=ReverseCipher())
        password, first = vault.create_password(label="Mail", password="secret")
        vault.update(password, label="Webmail")

        vault.password_revisions.delete(vault.password_revisions.find_by_uuid(first.uuid))

        raw = system_vault.password_revisions.find_by_uuid(first.uuid)
        assert raw.deleted is True
        assert raw.password == "terces"

    def test_destroy_cascade_reads_decrypted_history(self, engine, bus, system_vault):
        vault = Vault(engine, UserContext(user_id="alice"), event_bus=bus, cipher=ReverseCipher())
        password, _ = vault.create_password(label="Mail", password="secret")

        vault.passwords.destroy(password)

        assert system_vault.password_revisions.find_by_model(password.uuid) == []


class TestCurrentRevisionProtection:
    def test_current_revision_cannot_be_deleted(self, alice, bus):
        fired = []
        HookRegistry.register("PasswordRevision", "preDelete", fired.append)
        password, revision = alice.create_password(label="Mail", folder="F1")

        with pytest.raises(InvalidObject, match="current revision of a live object"):
            alice.password_revisions.delete(revision)

        assert fired == []
        assert revision.deleted is False
        assert alice.password_revisions.find_by_uuid(revision.uuid).deleted is False
        assert alice.passwords.get_by_folder("F1") == [password]

    def test_current_revision_cannot_be_destroyed(self, alice):
        password, revision = alice.create_password(label="Mail")

        with pytest.raises(InvalidObject):
            alice.password_revisions.destroy(revision)

        assert alice.current_revision(password) == revision

    def test_previous_revision_can_be_deleted(self, alice):
        password, first = alice.create_password(label="Mail")
        alice.update(password, label="Webmail")

        alice.password_revisions.delete(first)

        assert alice.password_revisions.find_by_uuid(first.uuid).deleted is True
        assert alice.current_revision(password).label == "Webmail"

    def test_revision_of_deleted_object_can_be_deleted(self, alice):
        folder, revision = alice.create_folder(label="Work")
        alice.folders.delete(folder)

        alice.folder_revisions.delete(revision)

        assert alice.folder_revisions.find_by_uuid(revision.uuid).deleted is True

    def test_purge_skips_current_revision(self, alice, engine, system_vault):
        password, revision = alice.create_password(label="Mail")
        # Written straight through the mapper, bypassing the service guard.
        revision.deleted = True
        PasswordRevisionMapper(engine).update(revision)

        assert system_vault.purge_deleted() == 0
        assert alice.current_revision(password).uuid == revision.uuid
        assert alice.passwords.find_by_uuid(password.uuid).deleted is False
