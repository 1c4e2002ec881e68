# tests/test_cli.py
import json

from lcicoder.cli import main
from lcicoder.samples import SYDNEY_LCI


def test_decode(capsys):
    assert main(["decode", SYDNEY_LCI]) == 0
    out = json.loads(capsys.readouterr().out)
    assert [s["id"] for s in out["subelements"]] == [0, 4, 6]
    assert out["record"]["lci"]["datum"] == 1
    assert "latitude" in out["record"]["lci"]


def test_decode_malformed_fails(capsys):
    assert main(["decode", "zz"]) == 1
    out = json.loads(capsys.readouterr().out)
    assert out["diagnostics"][0]["kind"] == "malformed_input"


def test_encode_sydney(capsys):
    rc = main([
        "encode", "--lat", "-33.8570095", "--lon", "151.2152005", "--alt", "11.2",
        "--latunc", "0.0007105", "--lonunc", "0.0007055", "--altunc", "33.7", "--heightunc", "0.0078125",
    ])
    assert rc == 0
    assert capsys.readouterr().out.strip() == f"lci={SYDNEY_LCI}"


def test_encode_with_bssids_and_check(capsys):
    rc = main(["encode", "--lat", "1", "--bssid", "00:11:22:33:44:55,66:77:88:99:aa:bb",
               "--bssid", "cc-dd-ee-ff-00-11", "--zero-indicator", "--check"])
    assert rc == 0
    first, rest = capsys.readouterr().out.split("\n", 1)
    assert first.startswith("lci=") and "071300" in first
    report = json.loads(rest)
    assert report["record"]["colocated_bssids"][2] == "cc:dd:ee:ff:00:11"


def test_sample(capsys):
    assert main(["sample", "--scenario", "mtv"]) == 0
    assert "Encode mtv: lci=" in capsys.readouterr().out


def test_encode_infinite_uncertainty_is_clamped(capsys):
    assert main(["encode", "--lat", "1", "--latunc", "inf", "--check"]) == 0
    first, rest = capsys.readouterr().out.split("\n", 1)
    assert first.startswith("lci=")
    assert json.loads(rest)["record"]["lci"]["latitude_uncertainty"] == 128.0
