"""Unit tests for the keyword intent classifier"""

import pytest

from orchestration.classifier import (
    CONFIDENCE_CAP,
    CONFIDENCE_FLOOR,
    Classifier,
    IntentPattern,
    KeywordIntentClassifier,
    extract_parameters,
)
from orchestration.types import AgentType, MessageIntent, TaskComplexity


class TestKeywordIntentClassifier:
    """Test suite for intent scoring"""

    @pytest.fixture
    def classifier(self):
        return KeywordIntentClassifier()

    def test_lead_generation_message(self, classifier):
        """Test the canonical lead-generation example"""
        result = classifier.classify("Looking for leads in sales navigator for CTOs")

        assert result.intent == MessageIntent.LEAD_GENERATION
        assert result.complexity == TaskComplexity.MODERATE
        assert result.suggested_agents == (AgentType.LEAD_RESEARCH, AgentType.KNOWLEDGE_BASE)
        assert result.confidence == pytest.approx(2 / 6)

    def test_greeting_stays_at_floor(self, classifier):
        """A single greeting hit scores 0.20 and never beats the floor"""
        result = classifier.classify("hello")

        assert result.intent == MessageIntent.GENERAL_QUESTION
        assert result.confidence == CONFIDENCE_FLOOR
        assert result.confidence == 0.30

    @pytest.mark.parametrize("message", ["", "zzz", "42", "Quarterly budget planning"])
    def test_unmatched_message_defaults(self, classifier, message):
        result = classifier.classify(message)

        assert result.intent == MessageIntent.GENERAL_QUESTION
        assert result.confidence == 0.30
        assert result.suggested_agents == (AgentType.KNOWLEDGE_BASE,)

    def test_keyword_matching_is_case_insensitive(self, classifier):
        result = classifier.classify("SCRAPE LINKEDIN PROSPECTS")

        assert result.intent == MessageIntent.LEAD_GENERATION
        assert result.confidence == pytest.approx(3 / 6)

    def test_confidence_is_capped(self):
        taxonomy = (
            IntentPattern(MessageIntent.CONTENT_CREATION, ("write",), TaskComplexity.MODERATE),
        )
        result = KeywordIntentClassifier(taxonomy).classify("write something")

        assert result.intent == MessageIntent.CONTENT_CREATION
        assert result.confidence == CONFIDENCE_CAP

    def test_tie_goes_to_earlier_intent(self):
        taxonomy = (
            IntentPattern(MessageIntent.CONTENT_CREATION, ("alpha", "beta"), TaskComplexity.MODERATE),
            IntentPattern(MessageIntent.PERFORMANCE_ANALYSIS, ("gamma", "delta"), TaskComplexity.COMPLEX),
        )
        result = KeywordIntentClassifier(taxonomy).classify("alpha gamma")

        assert result.intent == MessageIntent.CONTENT_CREATION
        assert result.complexity == TaskComplexity.MODERATE

    def test_full_match_beats_capped_earlier_intent(self):
        taxonomy = (
            IntentPattern(MessageIntent.CONTENT_CREATION, ("write",), TaskComplexity.MODERATE),
            IntentPattern(MessageIntent.PERFORMANCE_ANALYSIS, ("report",), TaskComplexity.COMPLEX),
        )
        result = KeywordIntentClassifier(taxonomy).classify("write a report")

        assert result.intent == MessageIntent.PERFORMANCE_ANALYSIS
        assert result.confidence == CONFIDENCE_CAP

    def test_higher_score_wins(self, classifier):
        """Two campaign keywords (2/6) clear the floor"""
        result = classifier.classify("improve the open rate")

        assert result.intent == MessageIntent.CAMPAIGN_OPTIMIZATION
        assert result.complexity == TaskComplexity.COMPLEX
        assert result.suggested_agents[0] == AgentType.CAMPAIGN_STRATEGY

    def test_estimated_tokens(self, classifier):
        assert classifier.classify("abcd").estimated_tokens == 1
        assert classifier.classify("abcde").estimated_tokens == 2
        assert classifier.classify("").estimated_tokens == 0

    def test_is_a_classifier(self, classifier):
        assert isinstance(classifier, Classifier)


class TestParameterExtraction:
    """Test suite for parameter extractors"""

    def test_metric_extraction(self):
        params = extract_parameters("We have 25% open rate today")
        assert params["metric"] == "25%"

    def test_location_first_match(self):
        params = extract_parameters("Prospects in Berlin")
        assert params["location"] == "Berlin"

    def test_industry_extraction(self):
        params = extract_parameters("Target the industry of fintech")
        assert params["industry"] == "fintech"

    def test_company_extraction(self):
        params = extract_parameters("Research the company called Acme")
        assert params["company"] == "Acme"

    def test_no_match_no_key(self):
        assert extract_parameters("hello") == {}

    def test_parameters_attached_to_classification(self):
        result = KeywordIntentClassifier().classify("Looking for leads in sales navigator for CTOs")
        assert result.parameters["location"] == "sales navigator for CTOs"
