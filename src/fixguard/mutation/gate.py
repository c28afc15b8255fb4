"""
SafeEditGate: decide whether a location may be mutated, and perform
syntax-checked in-place replacements.
"""

from fixguard.context.classifier import ContextClassifier
from fixguard.context.position import to_offset
from fixguard.exceptions import InvalidReplacementBoundsError, PositionError
from fixguard.logging_config import logger
from fixguard.schemas import ReplaceResult, SafeZone, SourceLocation
from fixguard.validation.validator import CodeValidator


class SafeEditGate:
    """
    Gate text mutations on lexical context and syntax validity.

    Veto order: string, comment, regex, template text. The first veto
    that applies decides the reason; a substitution inside a template
    (`${...}`) is plain code and passes.
    """

    def __init__(self, classifier: ContextClassifier, validator: CodeValidator):
        self.classifier = classifier
        self.validator = validator

    def find_safe_zone(self, buffer: str, location: SourceLocation) -> SafeZone:
        """
        Decide whether the location is safe for modification.

        Args:
            buffer: Source text
            location: Anything with 1-indexed `line` and `column` attributes

        Returns:
            SafeZone with verdict, human readable reason and the context
        """
        context = self.classifier.classify(buffer, location.line, location.column)

        if context.in_string:
            return SafeZone(
                is_safe=False,
                reason=f"Position is inside a string literal ({context.string_char})",
                context=context,
            )

        if context.in_comment:
            return SafeZone(
                is_safe=False,
                reason=f"Position is inside a {context.comment_type} comment",
                context=context,
            )

        if context.in_regex:
            return SafeZone(
                is_safe=False,
                reason="Position is inside a regular expression literal",
                context=context,
            )

        if context.in_template and not context.in_template_expression:
            return SafeZone(
                is_safe=False,
                reason="Position is inside template literal text",
                context=context,
            )

        return SafeZone(
            is_safe=True,
            reason="Position is safe for modifications",
            context=context,
        )

    def safe_replace(
        self,
        buffer: str,
        line: int,
        column: int,
        length: int,
        replacement: str
    ) -> ReplaceResult:
        """
        Replace `length` characters at (line, column) with `replacement`.

        The result is returned only if the location is safe and the new
        buffer passes syntax validation. Every failure returns the original
        buffer untouched with at least one warning.

        Args:
            buffer: Source text
            line: 1-indexed line of the replaced range
            column: 1-indexed column of the replaced range
            length: Number of characters to replace (0 inserts)
            replacement: Text to splice in

        Returns:
            ReplaceResult
        """
        try:
            safe_zone = self.find_safe_zone(buffer, SourceLocation(line=line, column=column))

            if not safe_zone.is_safe:
                logger.debug(f"Refusing replacement at {line}:{column}: {safe_zone.reason}")
                return ReplaceResult(
                    success=False,
                    buffer=buffer,
                    message=f"Cannot replace text: {safe_zone.reason}",
                    warnings=["Position is not safe for modification"],
                    failure_kind="unsafe_position",
                )

            start = to_offset(buffer, line, column)
            end = start + length
            if length < 0 or end > len(buffer):
                raise InvalidReplacementBoundsError(start, end, len(buffer))

            new_buffer = buffer[:start] + replacement + buffer[end:]

            validation = self.validator.validate_syntax(new_buffer)
            if not validation.is_valid:
                logger.debug(f"Replacement at {line}:{column} rejected: {validation.error}")
                return ReplaceResult(
                    success=False,
                    buffer=buffer,
                    message=f"Replacement would create invalid syntax: {validation.error}",
                    warnings=validation.warnings,
                    failure_kind="invalid_syntax",
                )

            return ReplaceResult(
                success=True,
                buffer=new_buffer,
                message="Text replaced successfully",
            )

        except PositionError as e:
            logger.warning(f"Replacement position out of range: {e}")
            return ReplaceResult(
                success=False,
                buffer=buffer,
                message=f"Error during replacement: {e}",
                warnings=["Position could not be mapped into the buffer"],
                failure_kind="position_out_of_range",
            )
        except InvalidReplacementBoundsError as e:
            logger.warning(str(e))
            return ReplaceResult(
                success=False,
                buffer=buffer,
                message=f"Error during replacement: {e}",
                warnings=["Replacement range does not fit inside the buffer"],
                failure_kind="invalid_bounds",
            )
        except Exception as e:
            logger.error(f"Unexpected error during replacement at {line}:{column}: {e}")
            return ReplaceResult(
                success=False,
                buffer=buffer,
                message=f"Error during replacement: {e}",
                warnings=["Unexpected error occurred during text replacement"],
                failure_kind="internal_error",
            )
