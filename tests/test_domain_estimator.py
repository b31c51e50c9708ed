"""Tests for the heuristic domain availability estimator."""
import pytest

from namegen.models.candidate import DomainStatus
from namegen.tools import domain_estimator
from namegen.tools.domain_estimator import (
    RULES,
    WELL_KNOWN_DOMAINS,
    common_word,
    dot_com,
    estimate,
    matching_rule,
    split_domain,
)


class TestRuleOrder:
    def test_rules_are_evaluated_in_declared_order(self):
        assert [rule.tag for rule in RULES] == [
            "well_known",
            "short_name",
            "common_word",
            "dot_com",
            "new_gtld",
            "legacy_gtld",
            "default",
        ]

    @pytest.mark.parametrize("domain", sorted(WELL_KNOWN_DOMAINS))
    def test_every_well_known_domain_is_taken(self, domain):
        assert estimate(domain) == DomainStatus.TAKEN
        assert matching_rule(domain).tag == "well_known"

    def test_well_known_match_is_case_insensitive(self):
        assert estimate("GitHub.com") == DomainStatus.TAKEN

    def test_well_known_beats_length_rules(self):
        # "stackoverflow" would otherwise be an available long .com
        assert matching_rule("stackoverflow.com").tag == "well_known"


class TestLengthAndWordRules:
    def test_four_letter_names_are_taken_on_any_extension(self):
        for domain in ("abcd.io", "abcd.ai", "abcd.xyz", "abcd.com"):
            assert estimate(domain) == DomainStatus.TAKEN
            assert matching_rule(domain).tag == "short_name"

    def test_common_word_rule_matches_stop_words(self):
        assert common_word(split_domain("the.io")) == DomainStatus.TAKEN
        assert common_word(split_domain("cloudflow.io")) is None

    def test_short_com_names_are_taken(self):
        assert estimate("abcdef.com") == DomainStatus.TAKEN
        assert matching_rule("abcdef.com").tag == "dot_com"

    def test_generic_com_words_are_taken_case_insensitively(self):
        assert dot_com(split_domain("CLOUD.com")) == DomainStatus.TAKEN
        assert dot_com(split_domain("cloud.io")) is None

    def test_long_creative_com_is_available(self):
        assert estimate("cloudflow.com") == DomainStatus.AVAILABLE


class TestExtensionRules:
    @pytest.mark.parametrize("ext", ["io", "co", "app", "dev", "tech", "ai", "me"])
    def test_new_extensions_are_optimistic(self, ext):
        assert estimate(f"abcde.{ext}") == DomainStatus.AVAILABLE
        assert matching_rule(f"abcde.{ext}").tag == "new_gtld"

    def test_legacy_extensions_threshold(self):
        assert estimate("abcde.net") == DomainStatus.TAKEN
        assert estimate("abcde.org") == DomainStatus.TAKEN
        assert estimate("abcdef.net") == DomainStatus.AVAILABLE
        assert estimate("abcdef.org") == DomainStatus.AVAILABLE

    def test_unlisted_extension_defaults_to_available(self):
        assert estimate("abcde.xyz") == DomainStatus.AVAILABLE
        assert matching_rule("abcde.xyz").tag == "default"


class TestDeterminism:
    def test_same_input_same_output(self):
        domains = ["cloudflow.com", "abcde.net", "team.io", "datasync.ai"]
        first = [estimate(d) for d in domains]
        second = [estimate(d) for d in domains]
        assert first == second

    def test_no_matching_rule_yields_unknown(self):
        assert estimate("cloudflow.com", rules=()) == DomainStatus.UNKNOWN
        assert domain_estimator.matching_rule("cloudflow.com", rules=()) is None
