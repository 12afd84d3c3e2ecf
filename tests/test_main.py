import io
import json
from datetime import date

import pytest

from kidscalendar.main import print_week, run_agenda
from kidscalendar.models import Activity, Child


def test_print_week_lists_occurrences_with_columns():
    kids = [Child('c1', 'Anna'), Child('c2', 'Ben')]
    acts = [
        Activity('a1', 'c1', 'Fußball', [1], '16:00', '17:00', 'Sportplatz'),
        Activity('a2', 'c2', 'Klavier', [1], '16:30', '17:30'),
    ]
    out = io.StringIO()
    count = print_week(kids, acts, date(2024, 1, 17), 4, out=out)
    text = out.getvalue()
    assert count == 2
    assert 'Woche ab 2024-01-14' in text
    assert 'Montag, 2024-01-15' in text
    assert '16:00 - 17:00  Anna: Fußball @ Sportplatz' in text
    assert 'Spalte 2/2' in text


def test_run_agenda(tmp_path, capsys):
    schedule = tmp_path / 'plan.json'
    schedule.write_text(json.dumps({
        'children': [{'id': 'c1', 'name': 'Anna'}],
        'activities': [{'id': 'a1', 'child_id': 'c1', 'title': 'Judo', 'days_of_week': [2],
                        'start_time': '17:00', 'end_time': '18:00', 'timezone': 'Europe/Berlin'}],
    }), encoding='utf-8')
    assert run_agenda([str(schedule), '--date', '2024-01-16']) == 0
    assert 'Judo' in capsys.readouterr().out


def test_run_agenda_missing_file(tmp_path, capsys):
    assert run_agenda([str(tmp_path / 'fehlt.json')]) == 1
    assert 'Fehler' in capsys.readouterr().err


def test_print_week_defaults_to_current_stdout(capsys):
    kids = [Child('c1', 'Anna')]
    acts = [Activity('a1', 'c1', 'Tanzen', [3], '15:00', '16:00')]
    print_week(kids, acts, date(2024, 1, 17))
    assert 'Anna: Tanzen' in capsys.readouterr().out


@pytest.mark.parametrize("value", ['0', '-2', 'viele'])
def test_max_columns_must_be_positive(value, capsys):
    with pytest.raises(SystemExit) as exc:
        run_agenda(['plan.json', '--max-columns', value])
    assert exc.value.code == 2
    assert '--max-columns' in capsys.readouterr().err
