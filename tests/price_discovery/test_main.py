"""Tests for the price discovery CLI."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest

from src.common.models import VariantOption
from src.price_discovery.car_part import main as cli
from src.price_discovery.car_part.models import (
    PricingResult,
    ScrapeResult,
    VariantListResult,
)

QUERY_ARGS = ["--year", "2015", "--make", "Honda", "--model", "Accord", "--part", "Engine"]


@pytest.fixture(autouse=True)
def quiet_logging():
    with patch.object(cli, "setup_logging"):
        yield


@pytest.fixture
def mock_scraper():
    scraper = MagicMock()
    scraper.__enter__.return_value = scraper
    with patch.object(cli, "CarPartScraper", return_value=scraper):
        yield scraper


class TestMain:
    def test_scrape_writes_output(self, mock_scraper, tmp_path):
        mock_scraper.scrape_pricing.return_value = ScrapeResult(
            success=True, metrics=PricingResult(60.0, 50.0, 70.0, 8.16, 3, 11)
        )
        out = tmp_path / "out" / "pricing.json"

        code = cli.main(QUERY_ARGS + ["--postal-code", "90210", "--output", str(out)])

        assert code == 0
        query = mock_scraper.scrape_pricing.call_args.args[0]
        assert query.make_model == "Honda Accord"
        assert query.postal_code == "90210"
        assert query.variant_value is None
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["success"] is True
        assert data["metrics"]["avgPrice"] == 60.0

    def test_failure_exit_code(self, mock_scraper, capsys):
        mock_scraper.scrape_pricing.return_value = ScrapeResult(
            success=False, error="Page 1: timed out"
        )

        assert cli.main(QUERY_ARGS + ["--variant", "ENG-24"]) == 1
        assert mock_scraper.scrape_pricing.call_args.args[0].variant_value == "ENG-24"
        assert json.loads(capsys.readouterr().out)["error"] == "Page 1: timed out"

    def test_list_variants(self, mock_scraper, capsys):
        mock_scraper.list_variants.return_value = VariantListResult(
            success=True, variants=[VariantOption(label="2.4L", value="ENG-24")]
        )

        assert cli.main(QUERY_ARGS + ["--list-variants"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["variants"] == [{"label": "2.4L", "value": "ENG-24"}]
        mock_scraper.scrape_pricing.assert_not_called()

    def test_missing_query_fields(self, mock_scraper):
        with pytest.raises(SystemExit):
            cli.main(["--year", "2015", "--make", "Honda"])

    def test_batch_mode(self, mock_scraper, tmp_path):
        items = tmp_path / "items.json"
        items.write_text(json.dumps([
            {"item_id": "a", "name": "Accord engine",
             "vehicleInfo": {"year": "2015", "make": "Honda", "model": "Accord", "part": "Engine"}},
            {"item_id": "b", "vehicleInfo": {"year": "2015"}},
        ]), encoding="utf-8")
        mock_scraper.config = cli.Config(item_delay_seconds=0)
        mock_scraper.scrape_pricing.return_value = ScrapeResult(
            success=True, metrics=PricingResult(60.0, 50.0, 70.0, 8.16, 3, 11)
        )
        out = tmp_path / "report.json"

        assert cli.main(["--batch", str(items), "--output", str(out)]) == 0

        report = json.loads(out.read_text(encoding="utf-8"))
        assert report["updated"] == 1
        assert report["skipped"] == 1

    def test_batch_with_errors_exit_code(self, mock_scraper, tmp_path, capsys):
        items = tmp_path / "items.json"
        items.write_text(json.dumps([
            {"item_id": "a",
             "vehicleInfo": {"year": "2015", "make": "Honda", "model": "Accord", "part": "Engine"}},
        ]), encoding="utf-8")
        mock_scraper.config = cli.Config(item_delay_seconds=0)
        mock_scraper.scrape_pricing.return_value = ScrapeResult(
            success=False, error="Page 1: timed out"
        )

        assert cli.main(["--batch", str(items)]) == 1
        assert json.loads(capsys.readouterr().out)["errors"] == 1

    @pytest.mark.parametrize(
        "content",
        ["{not json", '{"item_id": "a"}', '["a", "b"]', "[1]"],
    )
    def test_malformed_batch_file(self, mock_scraper, tmp_path, content):
        items = tmp_path / "items.json"
        items.write_text(content, encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--batch", str(items)])

        assert exc_info.value.code == 2
        mock_scraper.scrape_pricing.assert_not_called()

    def test_missing_batch_file(self, mock_scraper, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--batch", str(tmp_path / "absent.json")])

        assert exc_info.value.code == 2
