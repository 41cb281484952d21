import importlib
import json
import sys

import pytest

# We import run.py as a module and exercise parse_args + main with a patched
# start_server so we do not actually start networking.


@pytest.fixture()
def run_module(monkeypatch):
    # Ensure a clean import each time (run.py reads VERSION once)
    if 'run' in sys.modules:
        del sys.modules['run']
    return importlib.import_module('run')


@pytest.fixture()
def fake_server(monkeypatch):
    calls = {}

    def fake_start_server(host, port, debug):
        calls['called'] = True
        calls['host'] = host
        calls['port'] = port
        calls['debug'] = debug

    import dungeonpath.server as server_mod
    monkeypatch.setattr(server_mod, 'start_server', fake_start_server)
    return calls


def test_version_flag_outputs_version(run_module, capsys):
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(['--version'])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert run_module.__version__ in out
    assert 'dungeonpath' in out


def test_default_command_is_server(run_module):
    assert run_module.parse_args([]).command == 'server'


def test_server_main_invokes_start_server(monkeypatch, run_module, fake_server):
    monkeypatch.setenv('PORT', '5555')
    monkeypatch.setenv('HOST', '127.0.0.1')
    monkeypatch.delenv('FLASK_DEBUG', raising=False)
    assert run_module.main(['server']) == 0
    assert fake_server == {'called': True, 'host': '127.0.0.1', 'port': 5555, 'debug': False}


def test_server_main_debug_flag(run_module, fake_server):
    run_module.main(['server', '--debug', '--port', '6001'])
    assert fake_server['debug'] is True
    assert fake_server['port'] == 6001


def test_generate_prints_map_and_summary(run_module, capsys):
    assert run_module.main(['generate', '--seed', '3', '--min-length', '6', '--max-length', '6']) == 0
    out = capsys.readouterr().out
    assert '00' in out and '05' in out
    assert 'Path length:' in out
    assert 'Seed:' in out


def test_generate_json(run_module, capsys):
    assert run_module.main(['generate', '--seed', '3', '--json']) == 0
    data = json.loads(capsys.readouterr().out)
    assert data['seed'] == 3
    assert data['main_path'][0]['position'] == [0, 0]


def test_generate_reads_env_config(run_module, capsys, monkeypatch):
    monkeypatch.setenv('DUNGEON_MIN_MAIN_PATH_LENGTH', '4')
    monkeypatch.setenv('DUNGEON_MAX_MAIN_PATH_LENGTH', '4')
    assert run_module.main(['generate', '--seed', '8', '--json']) == 0
    data = json.loads(capsys.readouterr().out)
    assert len(data['main_path']) == 4
    assert data['config']['min_main_path_length'] == 4


def test_generate_infeasible_exit_code(run_module, capsys, monkeypatch):
    import dungeonpath.dungeon as dungeon_pkg
    from dungeonpath.dungeon import MainPathInfeasible

    def _raise(config):
        raise MainPathInfeasible(10, 4, seed=config.seed)

    monkeypatch.setattr(dungeon_pkg, 'Dungeon', _raise)
    assert run_module.main(['generate', '--seed', '1', '--fail-if-too-short']) == run_module.EXIT_INFEASIBLE
    assert 'main path needs 10 rooms' in capsys.readouterr().err


def test_generate_bad_env_value(run_module, capsys, monkeypatch):
    monkeypatch.setenv('DUNGEON_TURN_CHANCE', 'sometimes')
    assert run_module.main(['generate', '--seed', '1']) == 1
    assert '[ERROR]' in capsys.readouterr().err


def test_env_file_argument(monkeypatch, tmp_path, run_module, capsys):
    env_file = tmp_path / '.env'
    env_file.write_text('DUNGEON_MIN_MAIN_PATH_LENGTH=2\nDUNGEON_MAX_MAIN_PATH_LENGTH=2\n')
    monkeypatch.delenv('DUNGEON_MIN_MAIN_PATH_LENGTH', raising=False)
    monkeypatch.delenv('DUNGEON_MAX_MAIN_PATH_LENGTH', raising=False)
    try:
        assert run_module.main(['--env-file', str(env_file), 'generate', '--seed', '2', '--json']) == 0
        data = json.loads(capsys.readouterr().out)
        assert len(data['main_path']) == 2
    finally:
        import os
        os.environ.pop('DUNGEON_MIN_MAIN_PATH_LENGTH', None)
        os.environ.pop('DUNGEON_MAX_MAIN_PATH_LENGTH', None)
