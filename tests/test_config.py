import json
import os

from kidscalendar.config import DEFAULT_CONFIG, get_setting, load_config, save_config


def test_defaults_without_file(isolated_home):
    assert load_config() == DEFAULT_CONFIG
    assert get_setting('max_columns') == 4


def test_saved_values_override_defaults(isolated_home):
    save_config({'max_columns': 3})
    cfg = load_config()
    assert cfg['max_columns'] == 3
    assert cfg['reminder_minutes'] == [60, 30]
    assert os.path.exists(isolated_home / '.kidscalendar' / 'kidscalendar_config.json')


def test_corrupt_file_falls_back_to_defaults(isolated_home):
    path = isolated_home / '.kidscalendar' / 'kidscalendar_config.json'
    path.parent.mkdir(exist_ok=True)
    path.write_text('{kaputt', encoding='utf-8')
    assert load_config() == DEFAULT_CONFIG


def test_configured_max_columns_used_by_agenda(isolated_home, tmp_path, capsys):
    from kidscalendar.main import run_agenda
    plan = tmp_path / 'plan.json'
    plan.write_text(json.dumps({
        'children': [{'id': f'c{i}', 'name': f'Kind {i}'} for i in range(3)],
        'activities': [{'id': f'a{i}', 'child_id': f'c{i}', 'title': 'Chor', 'days_of_week': [1],
                        'start_time': '09:00', 'end_time': '10:00', 'timezone': 'Europe/Berlin'}
                       for i in range(3)],
    }), encoding='utf-8')
    save_config({'max_columns': 2})
    assert run_agenda([str(plan), '--date', '2024-01-15']) == 0
    out = capsys.readouterr().out
    assert out.count('+ weitere') == 1
    assert 'Spalte 2/2' in out
