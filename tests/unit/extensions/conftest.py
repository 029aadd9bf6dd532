"""Fixtures for framework and styling extension tests."""

import pytest

from stencil_core.pipeline import ProcessingPipeline


@pytest.fixture
def render(registry):
    """Process a template through the pipeline; fails the test on any error."""

    async def _render(template, **options):
        result = await ProcessingPipeline(registry).process(template, options)
        assert result.success, result.errors.format_errors()
        return result

    return _render
