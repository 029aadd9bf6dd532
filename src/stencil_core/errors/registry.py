"""Error registry for creating errors from templates."""

from typing import Any

from .errors import ErrorCategory, ErrorTemplate, StencilError


class ErrorRegistry:
    """Registry of error templates. Creates errors from templates + context."""

    def __init__(self) -> None:
        """Initialize error registry with built-in templates."""
        self._templates: dict[str, ErrorTemplate] = {}
        self._load_builtin_templates()

    def get_template(self, code: str) -> ErrorTemplate | None:
        """Get template by error code.

        Args:
            code: Error code to look up

        Returns:
            ErrorTemplate if found, None otherwise
        """
        return self._templates.get(code)

    def list_codes(self) -> list[str]:
        """List all registered error codes."""
        return list(self._templates.keys())

    def register(self, template: ErrorTemplate) -> None:
        """Add or replace a template (extensions may ship their own codes)."""
        self._templates[template.code] = template

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        cause: StencilError | None = None,
    ) -> StencilError:
        """Create error instance from template + context.

        Args:
            code: Error code
            context: Context variables for template interpolation
            cause: Optional cause error

        Returns:
            StencilError instance

        Raises:
            ValueError: If error code not found
        """
        template = self.get_template(code)
        if not template:
            msg = f"Unknown error code: {code}"
            raise ValueError(msg)

        context = context or {}

        message = self._interpolate(template.message_template, context)
        detail = self._interpolate(template.detail_template, context)
        suggestion = self._interpolate(template.suggestion_template, context)

        if message is None:
            message = f"Error {code}"

        # Explicit detail in context wins over the template detail
        if "detail" in context and template.detail_template is None:
            detail = str(context["detail"])

        return StencilError(
            code=template.code,
            category=template.category,
            message=message,
            detail=detail,
            suggestion=suggestion,
            node_id=context.get("node_id"),
            extension_key=context.get("extension_key"),
            stage=context.get("stage"),
            cause=cause,
        )

    def _interpolate(
        self,
        template: str | None,
        context: dict[str, Any],
    ) -> str | None:
        """Safe string interpolation.

        Args:
            template: Template string with {var} placeholders
            context: Context variables

        Returns:
            Interpolated string or None if template is None
        """
        if template is None:
            return None

        try:
            return template.format(**context)
        except (KeyError, IndexError):
            # Missing context variable - return template as-is
            return template

    def _load_builtin_templates(self) -> None:
        """Load hardcoded built-in templates."""
        # STRUCTURE Errors
        self._templates["TEMPLATE_STRUCTURE_INVALID"] = ErrorTemplate(
            code="TEMPLATE_STRUCTURE_INVALID",
            category=ErrorCategory.STRUCTURE,
            message_template="Invalid template structure: {detail}",
            suggestion_template="Templates must be a list of node objects",
        )

        # EXTRACTION Errors
        self._templates["CONCEPT_FIELD_MISSING"] = ErrorTemplate(
            code="CONCEPT_FIELD_MISSING",
            category=ErrorCategory.EXTRACTION,
            message_template="{detail}",
            suggestion_template="Add the missing field to node '{node_id}'",
        )

        # EXTENSION Errors
        self._templates["EXTENSION_NOT_FOUND"] = ErrorTemplate(
            code="EXTENSION_NOT_FOUND",
            category=ErrorCategory.EXTENSION,
            message_template="Extension '{extension_key}' not found",
            detail_template="No {extension_type} extension is registered under this key",
            suggestion_template="Register the extension before processing or fix the key",
        )

        self._templates["EXTENSION_INVALID"] = ErrorTemplate(
            code="EXTENSION_INVALID",
            category=ErrorCategory.EXTENSION,
            message_template="Extension '{extension_key}' failed validation",
            detail_template="{detail}",
        )

        self._templates["EXTENSION_FAILED"] = ErrorTemplate(
            code="EXTENSION_FAILED",
            category=ErrorCategory.EXTENSION,
            message_template="Extension '{extension_key}' failed in {stage}: {detail}",
            suggestion_template="Check the extension implementation for {stage}",
        )

        self._templates["FRAMEWORK_ALREADY_ACTIVE"] = ErrorTemplate(
            code="FRAMEWORK_ALREADY_ACTIVE",
            category=ErrorCategory.EXTENSION,
            message_template=(
                "Framework extension '{active_key}' is already active; "
                "cannot activate '{extension_key}'"
            ),
            suggestion_template="Select a single framework per render",
        )

        # RENDER Errors
        self._templates["RENDER_FAILED"] = ErrorTemplate(
            code="RENDER_FAILED",
            category=ErrorCategory.RENDER,
            message_template="Rendering with '{extension_key}' failed: {detail}",
        )

        # STYLE Errors
        self._templates["STYLE_FORMAT_UNSUPPORTED"] = ErrorTemplate(
            code="STYLE_FORMAT_UNSUPPORTED",
            category=ErrorCategory.STYLE,
            message_template="Unsupported style output format: {output_format}",
            suggestion_template="Use one of: inline, css, scss",
        )

        # OUTPUT Errors
        self._templates["OUTPUT_WRITE_FAILED"] = ErrorTemplate(
            code="OUTPUT_WRITE_FAILED",
            category=ErrorCategory.OUTPUT,
            message_template="Failed to write output to '{path}'",
            detail_template="{detail}",
            suggestion_template="Check that the output directory is writable",
        )

        # CONFIG Errors
        self._templates["CONFIG_NOT_FOUND"] = ErrorTemplate(
            code="CONFIG_NOT_FOUND",
            category=ErrorCategory.CONFIG,
            message_template="Configuration file not found: {path}",
            suggestion_template="Create the file or set STENCIL_CONFIG_PATH",
        )

        self._templates["CONFIG_INVALID"] = ErrorTemplate(
            code="CONFIG_INVALID",
            category=ErrorCategory.CONFIG,
            message_template="Invalid configuration",
            detail_template="{detail}",
            suggestion_template="Check the configuration file against the documented keys",
        )

        # SYSTEM Errors
        self._templates["INTERNAL_ERROR"] = ErrorTemplate(
            code="INTERNAL_ERROR",
            category=ErrorCategory.SYSTEM,
            message_template="Internal error: {detail}",
            detail_template="{error_type}: {detail}",
        )
