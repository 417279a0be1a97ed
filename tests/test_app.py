"""
Application factory and configuration tests
"""
import os

from flask import Flask

from blog_admin import create_app, LOG_HANDLER_NAME
from config import DevelopmentConfig, TestingConfig


def _named_handlers(app):
    return [h for h in app.logger.handlers if h.get_name() == LOG_HANDLER_NAME]


def test_repeated_create_app_keeps_one_log_handler():
    first = create_app(config_class=TestingConfig)
    second = create_app(config_class=TestingConfig)
    handler_count = len(second.logger.handlers)
    third = create_app(config_class=TestingConfig)

    assert first.logger is third.logger
    assert len(_named_handlers(third)) == 1
    assert len(third.logger.handlers) == handler_count


def test_template_context_has_only_used_variables(app):
    with app.test_request_context('/'):
        context = {}
        app.update_template_context(context)

    assert 'csp_nonce' not in context
    assert 'debug_mode' not in context
    assert context['csrf_enabled'] is False
    assert context['app_version'] == app.config['VERSION']


def test_development_instance_dir_created_by_init_app(tmp_path, monkeypatch):
    instance_dir = tmp_path / 'instance'
    monkeypatch.setattr(DevelopmentConfig, 'INSTANCE_DIR', str(instance_dir))
    monkeypatch.delenv('DATABASE_URL', raising=False)

    assert not instance_dir.exists()
    DevelopmentConfig.init_app(Flask(__name__))

    assert instance_dir.is_dir()


def test_development_instance_dir_skipped_with_database_url(tmp_path, monkeypatch):
    instance_dir = tmp_path / 'instance'
    monkeypatch.setattr(DevelopmentConfig, 'INSTANCE_DIR', str(instance_dir))
    monkeypatch.setenv('DATABASE_URL', 'sqlite://')

    DevelopmentConfig.init_app(Flask(__name__))

    assert not os.path.exists(instance_dir)
