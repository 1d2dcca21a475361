"""Paper enrichment with short LLM-derived labels."""

from grugtok.enricher.base import PaperEnricher
from grugtok.enricher.claude import PROMPT_TEMPLATE, SYSTEM_PROMPT, ClaudeEnricher, build_prompt
from grugtok.enricher.fallback import FallbackEnricher
from grugtok.enricher.parse import parse_enrichment, strip_code_fence

__all__ = [
    "PROMPT_TEMPLATE",
    "SYSTEM_PROMPT",
    "ClaudeEnricher",
    "FallbackEnricher",
    "PaperEnricher",
    "build_prompt",
    "parse_enrichment",
    "strip_code_fence",
]
