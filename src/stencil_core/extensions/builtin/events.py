"""Utility extension that canonicalizes event names and modifiers."""

import logging

from stencil_core.concepts import ComponentConcept
from stencil_core.normalization import SVELTE_MODIFIER_ALIASES, EventNormalizer
from stencil_core.types import ExtensionType

from ..base import UtilityExtension
from ..types import ExtensionMetadata

logger = logging.getLogger(__name__)

# Svelte spellings -> canonical (Vue) spellings
CANONICAL_MODIFIERS = {svelte: vue for vue, svelte in SVELTE_MODIFIER_ALIASES.items()}


class EventNormalizationUtility(UtilityExtension):
    """Rewrites each event to its canonical lowercase name and modifier spelling.

    ``onClick``-style or prefixed names that slipped through extraction
    (``@click.prevent``, ``on:submit|preventDefault``) are reduced to their
    common name; unmapped names are kept and reported by the normalizer.
    """

    metadata = ExtensionMetadata(
        key="normalize-events",
        name="Event Normalization Utility",
        version="1.0.0",
        type=ExtensionType.UTILITY,
        description="Canonical event names and modifiers",
    )

    def __init__(self, normalizer: EventNormalizer | None = None):
        self.normalizer = normalizer or EventNormalizer()

    def process(self, concepts: ComponentConcept) -> ComponentConcept:
        known = set(self.normalizer.get_common_event_names())
        for event in concepts.events:
            name = self.normalizer.extract_common_event_name(event.name)
            if name not in known:
                logger.debug(f"Event '{name}' on {event.node_id} has no common mapping")
            event.name = name
            event.modifiers = [CANONICAL_MODIFIERS.get(m, m) for m in event.modifiers]
        return concepts
