import types

from minhas_contas import session
from minhas_contas.models import PersonData


def test_person_data_loaded_once_per_session(monkeypatch):
    dummy_state = {}
    calls = []
    monkeypatch.setattr(session, 'st', types.SimpleNamespace(session_state=dummy_state))

    def fake_load():
        calls.append(1)
        return PersonData(name="Carregado")

    monkeypatch.setattr(session, '_load_impl', fake_load)
    assert session.get_person_data().name == "Carregado"
    assert session.get_person_data().name == "Carregado"
    assert len(calls) == 1


def test_commit_replaces_snapshot_and_saves(monkeypatch):
    dummy_state = {'person_data': PersonData.default()}
    saved = []
    monkeypatch.setattr(session, 'st', types.SimpleNamespace(session_state=dummy_state))
    monkeypatch.setattr(session, '_save_impl', lambda data: saved.append(data) or True)

    new_data = PersonData(name="Novo")
    assert session.commit(new_data)
    assert dummy_state['person_data'] is new_data
    assert saved == [new_data]
    assert dummy_state['save_failed'] is False


def test_commit_keeps_memory_snapshot_when_save_fails(monkeypatch):
    dummy_state = {}
    monkeypatch.setattr(session, 'st', types.SimpleNamespace(session_state=dummy_state))
    monkeypatch.setattr(session, '_save_impl', lambda data: False)

    new_data = PersonData(name="Offline")
    assert session.commit(new_data) is False
    assert dummy_state['person_data'] is new_data
    assert dummy_state['save_failed'] is True


def test_toggle_theme_persists_choice(monkeypatch):
    dummy_state = {}
    stored = []
    monkeypatch.setattr(session, 'st', types.SimpleNamespace(session_state=dummy_state))
    monkeypatch.setattr(session, '_theme_load_impl', lambda: 'light')
    monkeypatch.setattr(session, '_theme_save_impl', stored.append)

    assert session.toggle_theme() == 'dark'
    assert session.toggle_theme() == 'light'
    assert stored == ['dark', 'light']


def test_rerun_prefers_streamlit_rerun(monkeypatch):
    called = {}

    def fake_rerun():
        called['method'] = 'rerun'

    monkeypatch.setattr(session, 'st', types.SimpleNamespace(rerun=fake_rerun))
    session._rerun()
    assert called['method'] == 'rerun'


def test_rerun_falls_back_to_experimental(monkeypatch):
    called = {}

    def fake_experimental():
        called['method'] = 'experimental'

    monkeypatch.setattr(session, 'st', types.SimpleNamespace(experimental_rerun=fake_experimental))
    session._rerun()
    assert called['method'] == 'experimental'
