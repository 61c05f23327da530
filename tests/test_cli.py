"""Unit tests for the mesh-telemetry CLI."""

import json

from typer.testing import CliRunner

from mesh_telemetry.cli import app

runner = CliRunner()


class TestGenerate:
    def test_json_output(self):
        result = runner.invoke(app, ["generate", "--seed", "7", "--format", "json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert len(data["series"]["samples"]) == 12
        assert data["time_range"] == "1h"
        assert 1 <= data["rollup"]["service_health"]["current"] <= 5

    def test_json_output_is_reproducible_per_seed(self):
        args = ["generate", "--seed", "3", "-f", "json", "-r", "7d"]
        a = json.loads(runner.invoke(app, args).output)
        b = json.loads(runner.invoke(app, args).output)
        assert len(a["series"]["samples"]) == 96
        assert [s["requests"] for s in a["series"]["samples"]] == [
            s["requests"] for s in b["series"]["samples"]
        ]

    def test_filters_reach_engine(self):
        result = runner.invoke(
            app,
            [
                "generate",
                "-n", "istio-system",
                "-s", "productpage",
                "-w", "reviews-v3",
                "--seed", "1",
                "-f", "json",
            ],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["selection"]["namespace"] == "istio-system"
        assert abs(data["series"]["multiplier"] - 1.5 * 1.3 * 1.2) < 1e-9

    def test_hourly_mode(self):
        result = runner.invoke(
            app, ["generate", "--mode", "hourly", "-r", "7d", "--seed", "1", "-f", "json"]
        )
        assert result.exit_code == 0, result.output
        samples = json.loads(result.output)["series"]["samples"]
        assert [s["time"] for s in samples][:3] == ["00:00", "01:00", "02:00"]
        assert len(samples) == 24

    def test_text_output(self):
        result = runner.invoke(app, ["generate", "--seed", "1", "--metric", "latency"])
        assert result.exit_code == 0, result.output
        assert "Service health" in result.output
        assert "Latency (ms) vs P95 Latency (ms)" in result.output

    def test_invalid_range(self):
        result = runner.invoke(app, ["generate", "--range", "2h"])
        assert result.exit_code == 1
        assert "Unknown time range" in result.output

    def test_invalid_mode(self):
        result = runner.invoke(app, ["generate", "--mode", "weekly"])
        assert result.exit_code == 1
        assert "Unknown bucketing mode" in result.output

    def test_invalid_format(self):
        result = runner.invoke(app, ["generate", "--seed", "1", "--format", "yaml"])
        assert result.exit_code == 1
        assert "Unknown output format" in result.output


class TestCatalog:
    def test_json(self):
        result = runner.invoke(app, ["catalog", "--format", "json"])
        assert result.exit_code == 0, result.output
        entries = json.loads(result.output)
        assert len(entries) == 17
        istio = {"dimension": "namespace", "value": "istio-system", "weight": 1.5, "mapped": True}
        assert istio in entries

    def test_json_is_a_single_document(self):
        result = runner.invoke(app, ["catalog", "-f", "json"])
        entries = json.loads(result.output)
        assert isinstance(entries, list)
        assert {e["dimension"] for e in entries} == {"namespace", "service", "workload"}

    def test_invalid_format(self):
        result = runner.invoke(app, ["catalog", "--format", "csv"])
        assert result.exit_code == 1
        assert "Unknown output format" in result.output

    def test_text(self):
        result = runner.invoke(app, ["catalog"])
        assert result.exit_code == 0
        assert "Filter Catalog" in result.output


class TestRanges:
    def test_lists_bucket_table(self):
        result = runner.invoke(app, ["ranges"])
        assert result.exit_code == 0
        assert "7d" in result.output
        assert "96" in result.output
        assert "hourly mode" in result.output
