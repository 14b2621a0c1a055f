"""Tests for SessionStore."""

from gacha_admin.auth.models import AuthSession
from gacha_admin.auth.session import SessionStore


def test_sign_in_and_out_notify_listeners(admin):
    store = SessionStore()
    events = []
    store.on_sign_in(lambda session: events.append(('in', session.identity.id)))
    store.on_sign_out(lambda session: events.append(('out', session.identity.id)))

    store.sign_in(AuthSession(access_token='t-1', identity=admin))
    assert store.is_authenticated()
    assert store.access_token == 't-1'
    assert store.identity is admin

    store.sign_out()
    store.sign_out()

    assert events == [('in', 'u-admin'), ('out', 'u-admin')]
    assert store.access_token is None
    assert store.identity is None


def test_second_sign_in_ends_previous_session(admin, super_admin):
    store = SessionStore()
    events = []
    store.on_sign_out(lambda session: events.append(session.identity.id))

    store.sign_in(AuthSession(access_token='t-1', identity=admin))
    store.sign_in(AuthSession(access_token='t-2', identity=super_admin))

    assert events == ['u-admin']
    assert store.identity is super_admin
