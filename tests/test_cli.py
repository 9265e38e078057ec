"""Tests for the command-line interface."""

import json

import pytest

from single_server_queue.scripts.run_simulation import build_config, build_parser, main


def test_single_run_writes_json(tmp_path, capsys):
    output = tmp_path / 'result.json'
    code = main(['--stop', 'customers', '--limit', '200', '--seed', '1',
                 '--sample-interval', '50', '-o', str(output)])
    assert code == 0

    printed = capsys.readouterr().out
    assert "=== Simulation Results ===" in printed
    assert "=== Theoretical Values (M/M/1) ===" in printed

    data = json.loads(output.read_text())
    assert data['served_customers'] == 200
    assert data['seed'] == 1
    assert 'queue_length' in data['time_series']


def test_replications_write_summary(tmp_path):
    output = tmp_path / 'summary.json'
    code = main(['-r', '2', '--stop', 'events', '--limit', '500', '-q', '-o', str(output)])
    assert code == 0

    data = json.loads(output.read_text())
    assert data['replications'] == 2
    assert data['metrics']['events_processed']['mean'] == 500
    assert [run['seed'] for run in data['runs']] == [42, 43]


def test_unstable_parameters_serialise_infinite_theory(tmp_path):
    output = tmp_path / 'unstable.json'
    main(['--arrival-rate', '2', '--service-rate', '1', '--stop', 'events',
          '--limit', '100', '--seed', '0', '-q', '-o', str(output)])
    data = json.loads(output.read_text())
    assert data['theoretical']['wait_time'] == 'inf'


def test_config_file_with_overrides(tmp_path):
    path = tmp_path / 'config.json'
    path.write_text(json.dumps({
        'arrival_rate': 0.3,
        'service_rate': 0.6,
        'stop': {'kind': 'customers', 'limit': 50},
        'seed': 4,
    }))
    args = build_parser().parse_args(['--config', str(path), '--service-rate', '1.2'])
    config = build_config(args)

    assert config.arrival_rate == 0.3
    assert config.service_rate == 1.2
    assert config.stop.kind == 'customers'
    assert config.stop.limit == 50
    assert config.seed == 4


def test_zero_sample_interval_disables_sampling():
    args = build_parser().parse_args(['--sample-interval', '0'])
    assert build_config(args).sample_interval is None


@pytest.mark.parametrize('argv', [
    ['--arrival-rate', '-1'],
    ['--stop', 'time', '--limit', '0'],
    ['--config', '/nonexistent/config.json'],
    ['--stop', 'events', '--limit', '1.5'],
    ['--stop', 'customers', '--limit', '10.25'],
    ['-r', '0'],
    ['-r', '-3'],
    ['-r', '2', '-j', '0'],
])
def test_bad_input_exits_with_usage_error(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv + ['-q'])
    assert excinfo.value.code == 2
