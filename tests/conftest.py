"""Shared pytest fixtures for all tests."""

import pytest
from cli.config import Config
from common.types import QsoRecord
from replica.persistence import SnapshotStore
from replica.service import ReplicaService
from replica.store import ReplicaStore


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to temporary .qsolog directory
    """
    config_dir = tmp_path / '.qsolog'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir):
    """
    Create temporary config instance.

    Args:
        temp_config_dir: Temporary config directory fixture

    Returns:
        Config instance with temp config file
    """
    return Config(temp_config_dir / 'config.json')


@pytest.fixture
def store():
    """Empty replica store."""
    return ReplicaStore()


@pytest.fixture
def snapshot(tmp_path):
    """Snapshot store writing into a temporary data directory."""
    return SnapshotStore(tmp_path / 'data' / 'hamlog.qsos.v1.json')


@pytest.fixture
def local_service(store, snapshot, tmp_path):
    """Replica service without a transport (snapshot mode)."""
    return ReplicaService(
        store,
        snapshot=snapshot,
        export_dir=tmp_path / 'exports',
        delete_confirm_timeout=0.05,
    )


@pytest.fixture
def make_qso():
    """
    Factory for QSO records with sensible defaults.

    Returns:
        Callable taking field overrides
    """
    def _make(qso_id='q1', **overrides):
        fields = dict(
            callsign='W1AW',
            dt='2024-01-01T00:00',
            band='20m',
            freq='14.074',
            mode='FT8',
            my_grid='JO62',
            their_grid='FN31',
            rst_sent='-10',
            rst_received='-12',
            ts=1704067200000,
        )
        fields.update(overrides)
        return QsoRecord(id=qso_id, **fields)
    return _make


@pytest.fixture
def sample_csv(tmp_path):
    """
    Create a CSV file with one complete row and one row without callsign.

    Returns:
        Path to the CSV file
    """
    file_path = tmp_path / 'hamlog.csv'
    file_path.write_text(
        'callsign,dt,band,freq,mode\n'
        'dl1abc,2024-03-01T12:00,20m,14.074,ft8\n'
        ',2024-03-01T12:05,20m,14.074,ft8\n'
    )
    return file_path
