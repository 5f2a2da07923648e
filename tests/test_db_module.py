'''Test db module for database connection handling.'''

from __future__ import annotations

import pytest
import psycopg

import db


@pytest.mark.db
def test_get_conn_uses_fixed_host_and_given_credentials(monkeypatch):
    '''get_conn connects to the configured host with the CLI credentials.'''
    recorded = {}

    def fake_connect(**kwargs):
        recorded.update(kwargs)
        return "connection"

    monkeypatch.setattr(db.psycopg, "connect", fake_connect)

    conn = db.get_conn("koala", "koala_manual", "secret")
    assert conn == "connection"
    assert recorded["host"] == db.DB_HOST
    assert recorded["port"] == int(db.DB_PORT)
    assert recorded["dbname"] == "koala"
    assert recorded["user"] == "koala_manual"
    assert recorded["password"] == "secret"
    assert recorded["row_factory"] == db.dict_row


@pytest.mark.db
def test_get_conn_propagates_connection_errors(monkeypatch):
    '''Connection failures are not retried or swallowed.'''
    calls = []

    def fake_connect(**kwargs):
        calls.append(kwargs)
        raise psycopg.OperationalError("connection refused")

    monkeypatch.setattr(db.psycopg, "connect", fake_connect)

    with pytest.raises(psycopg.OperationalError, match="connection refused"):
        db.get_conn("koala", "koala_manual", "secret")
    assert len(calls) == 1


@pytest.mark.db
def test_get_conn_rejects_non_numeric_port(monkeypatch):
    '''A bad PGPORT surfaces as a connection error before connecting.'''
    calls = []
    monkeypatch.setattr(db, "DB_PORT", "fivefourthreetwo")
    monkeypatch.setattr(db.psycopg, "connect", lambda **kwargs: calls.append(kwargs))

    with pytest.raises(psycopg.OperationalError, match="fivefourthreetwo"):
        db.get_conn("koala", "koala_manual", "secret")
    assert calls == []
