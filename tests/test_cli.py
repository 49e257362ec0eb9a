import json

import pytest

import main
from main import format_amount


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    # Leave pytest's root handlers alone
    monkeypatch.setattr(main, "setup_logger", lambda **kwargs: None)


def test_format_amount():
    assert format_amount(39234.94) == "39,234.94"
    assert format_amount(0.06) == "0.06"
    assert format_amount(float("nan")) == "0.00"
    assert format_amount(float("inf")) == "0.00"

def test_default_sell_example(capsys):
    assert main.main([]) == 0
    out = capsys.readouterr().out
    assert "0.600%" in out
    assert "Capital Gains Tax" in out
    assert "Net Receivable" in out
    assert "39,234.94" in out
    assert "Penalty" not in out
    assert "odd lot" not in out

def test_buy_labels(capsys):
    assert main.main(["--type", "buy", "--amount", "600000"]) == 0
    out = capsys.readouterr().out
    assert "Total Add-on Costs" in out
    assert "Total Payable" in out
    assert "603,025.90" in out
    assert "Capital Gains Tax" not in out

def test_penalty_and_odd_lot(capsys):
    assert main.main(["--amount", "10000", "--penalty", "--units", "5"]) == 0
    out = capsys.readouterr().out
    assert "Penalty" in out
    assert "2,000.00" in out
    assert "odd lot" in out

def test_negative_net_warning(capsys):
    assert main.main(["--amount", "10", "--purchase-cost", "0"]) == 0
    assert "exceed" in capsys.readouterr().out

def test_json_output(capsys):
    assert main.main(["--json", "--type", "buy", "--amount", "600000"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["transaction_type"] == "buy"
    assert data["net_amount"] == pytest.approx(603025.9)

def test_invalid_input_exit_code(capsys):
    assert main.main(["--amount", "-5"]) == 2
    assert "amount must be non-negative" in capsys.readouterr().err

def test_penalty_percent_out_of_range(capsys):
    assert main.main(["--penalty", "--penalty-percent", "150"]) == 2
    assert "penalty_percent" in capsys.readouterr().err
