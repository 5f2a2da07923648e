''' Database connection utility '''

import logging

import psycopg
from psycopg.rows import dict_row

from config import DB_HOST, DB_PORT

LOG = logging.getLogger("alv_metrics.db")


def _port():
    ''' The configured port as an int; a bad PGPORT is a connection error '''
    try:
        return int(DB_PORT)
    except ValueError as exc:
        raise psycopg.OperationalError(f"invalid port {DB_PORT!r} (check PGPORT)") from exc


def get_conn(dbname, user, password):
    ''' Open a connection to the fixed database host with the given credentials '''
    port = _port()
    LOG.debug("Connecting to %s:%s/%s as %s", DB_HOST, port, dbname, user)
    return psycopg.connect(host=DB_HOST, port=port, dbname=dbname,
                           user=user, password=password, row_factory=dict_row)
