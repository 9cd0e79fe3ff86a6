import pytest

from guardian_booking.core import config
from guardian_booking.core.context import build_context


@pytest.mark.parametrize(
    ('value', 'expected'),
    [
        (None, True),
        ('1', True),
        (' Yes ', True),
        ('off', False),
        ('', False),
    ],
)
def test_get_bool(value, expected) -> None:
    assert config._get_bool(value, default=True) is expected


def test_get_list_splits_and_strips() -> None:
    assert config._get_list(' http://a.test , ,http://b.test', default=[]) == ['http://a.test', 'http://b.test']
    assert config._get_list(None, default=['x']) == ['x']


def test_validate_runtime_config_rejects_negative_delay(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'SUBMISSION_DELAY_SECONDS', -1.0)

    with pytest.raises(RuntimeError):
        config.validate_runtime_config()


def test_validate_runtime_config_rejects_demo_data_in_production(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'APP_ENV', 'Production')
    monkeypatch.setattr(config, 'SEED_DEMO_DATA', True)

    with pytest.raises(RuntimeError):
        config.validate_runtime_config()

    monkeypatch.setattr(config, 'SEED_DEMO_DATA', False)
    config.validate_runtime_config()


def test_build_context_seeds_demo_appointments(monkeypatch: pytest.MonkeyPatch, clock) -> None:
    monkeypatch.setattr(config, 'SEED_DEMO_DATA', True)
    monkeypatch.setattr(config, 'SUBMISSION_DELAY_SECONDS', 0.5)

    context = build_context(clock=clock)

    assert len(context.repository) == 2
    assert context.submission_delay_seconds == 0.5
    assert context.validator.repository is context.repository


def test_build_context_without_demo_appointments(monkeypatch: pytest.MonkeyPatch, clock) -> None:
    monkeypatch.setattr(config, 'SEED_DEMO_DATA', False)

    context = build_context(clock=clock)

    assert len(context.repository) == 0
    assert len(context.catalog.students) == 3
