"""Tests for consent_check.analysis.consent_decoder: gcs decoding."""

from __future__ import annotations

import pytest

from consent_check.analysis import consent_decoder
from consent_check.models import tracking, verdict


class TestDecodeMissingGcs:
    """No gcs value means consent mode was not detected."""

    @pytest.mark.parametrize("gcs", [None, ""])
    def test_unknown_without_echo(self, gcs: str | None) -> None:
        result = consent_decoder.decode(gcs, "13l3l3l3l1")
        assert isinstance(result, verdict.UnknownVerdict)
        assert result.gcs_value is None
        assert result.gcd_value is None
        assert result.message == consent_decoder.NO_CONSENT_MODE_MESSAGE


class TestDecodeG1Codes:
    """Tests for the G1xy consent codes."""

    def test_both_granted_fails(self) -> None:
        result = consent_decoder.decode("G111", "13t3t3t3t1")
        assert isinstance(result, verdict.FailVerdict)
        assert result.status == "fail"
        assert result.gcs_value == "G111"
        assert result.gcd_value == "13t3t3t3t1"
        assert result.message == "Consent mode allows tracking by default"

    def test_both_denied_passes(self) -> None:
        result = consent_decoder.decode("G100", None)
        assert isinstance(result, verdict.PassVerdict)
        assert result.status == "pass"
        assert result.gcs_value == "G100"
        assert result.gcd_value is None

    def test_ad_granted_analytics_denied(self) -> None:
        result = consent_decoder.decode("G110", None)
        assert result.status == "unknown"
        assert result.gcs_value == "G110"
        assert result.message == "Partial consent detected: 10"
        assert result.details == "Mixed consent state - ad_storage: granted, analytics_storage: denied"

    def test_ad_denied_analytics_granted(self) -> None:
        result = consent_decoder.decode("G101", None)
        assert result.status == "unknown"
        assert result.details == "Mixed consent state - ad_storage: denied, analytics_storage: granted"

    @pytest.mark.parametrize("gcs", ["G1", "G1x", "G1111", "G12"])
    def test_odd_codes_degrade_to_unknown(self, gcs: str) -> None:
        result = consent_decoder.decode(gcs, None)
        assert result.status == "unknown"
        assert result.gcs_value == gcs

    def test_gcd_never_changes_the_outcome(self) -> None:
        assert consent_decoder.decode("G100", "11p1p1p1p5").status == "pass"
        assert consent_decoder.decode("G100", None).status == "pass"


class TestDecodeUnrecognizedFormat:
    """Values without the G1 prefix."""

    @pytest.mark.parametrize("gcs", ["X100", "G200", "g100", "100"])
    def test_echoes_raw_value(self, gcs: str) -> None:
        result = consent_decoder.decode(gcs, "13l3l3l3l1")
        assert isinstance(result, verdict.UnknownVerdict)
        assert result.message == "Unrecognized gcs parameter format"
        assert result.details == f"Expected format G1xy but got: {gcs}"
        assert result.gcs_value == gcs
        assert result.gcd_value == "13l3l3l3l1"


class TestDecodeIsPure:
    """Repeated decoding yields identical verdicts."""

    @pytest.mark.parametrize(("gcs", "gcd"), [(None, None), ("G100", "x"), ("G111", None), ("G110", "y"), ("X1", None)])
    def test_idempotent(self, gcs: str | None, gcd: str | None) -> None:
        assert consent_decoder.decode(gcs, gcd) == consent_decoder.decode(gcs, gcd)


class TestParseConsentSignal:
    """Tests for parse_consent_signal()."""

    def test_reads_both_params(self) -> None:
        signal = consent_decoder.parse_consent_signal(
            "https://www.google-analytics.com/g/collect?v=2&gcs=G100&gcd=13l3l3l3l1"
        )
        assert signal == tracking.ConsentSignal(gcs="G100", gcd="13l3l3l3l1")

    def test_missing_params(self) -> None:
        signal = consent_decoder.parse_consent_signal("https://www.google-analytics.com/g/collect?v=2")
        assert signal.gcs is None
        assert signal.gcd is None

    def test_blank_value_is_absent(self) -> None:
        assert consent_decoder.parse_consent_signal("https://x.example/collect?gcs=&gcd=1").gcs is None

    def test_first_value_wins(self) -> None:
        assert consent_decoder.parse_consent_signal("https://x.example/collect?gcs=G100&gcs=G111").gcs == "G100"

    def test_malformed_url_does_not_raise(self) -> None:
        assert consent_decoder.parse_consent_signal("http://[::1/collect?gcs=G100").gcs is None

    def test_decode_signal(self) -> None:
        result = consent_decoder.decode_signal(tracking.ConsentSignal(gcs="G111", gcd=None))
        assert result.status == "fail"
