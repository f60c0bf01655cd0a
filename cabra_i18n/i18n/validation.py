"""Consistency checks for a set of translation bundles.

Compares every bundle against a base locale and reports missing files,
missing or extra keys, placeholder mismatches, bad metadata and empty
strings. Errors make a report invalid; warnings do not.

Usage:
    from cabra_i18n.i18n.validation import validate_directory

    report = validate_directory("./locales")
    if not report.is_valid:
        for issue in report.errors:
            print(issue.code, issue.locale, issue.message)
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from cabra_i18n.i18n import locales
from cabra_i18n.i18n.loader import FileTranslationLoader, load_bundle_file
from cabra_i18n.i18n.models import MISSING, lookup_path
from cabra_i18n.i18n.translator import PLACEHOLDER_PATTERN
from cabra_i18n.logging import get_module_logger

logger = get_module_logger()

REQUIRED_METADATA = ("locale", "language", "nativeName", "direction", "version")


class IssueCode(str, Enum):
    MISSING_FILE = "missing_file"
    PARSE_ERROR = "parse_error"
    MISSING_BASE_LOCALE = "missing_base_locale"
    MISSING_KEYS = "missing_keys"
    EXTRA_KEYS = "extra_keys"
    INCONSISTENT_PLACEHOLDERS = "inconsistent_placeholders"
    MISSING_METADATA = "missing_metadata"
    INVALID_DIRECTION = "invalid_direction"
    LOCALE_CODE_MISMATCH = "locale_code_mismatch"
    EMPTY_TRANSLATIONS = "empty_translations"


@dataclass
class ValidationIssue:
    """One finding of the validator.

    Attributes:
        code: Kind of problem.
        message: Human-readable description.
        locale: Locale the finding applies to, if any.
        keys: Dotted keys involved, if any.
        details: Extra data (expected/actual placeholders, field name...).
    """

    code: IssueCode
    message: str
    locale: Optional[str] = None
    keys: List[str] = field(default_factory=list)
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ValidationReport:
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)
    stats: Dict[str, int] = field(
        default_factory=lambda: {
            "locales_loaded": 0,
            "total_keys": 0,
            "missing_keys": 0,
            "extra_keys": 0,
            "inconsistent_placeholders": 0,
        }
    )
    completeness: Dict[str, int] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def issues_for(self, locale: str) -> List[ValidationIssue]:
        return [i for i in self.errors + self.warnings if i.locale == locale]


def flatten_keys(tree: Mapping[str, Any], prefix: str = "") -> List[str]:
    """List the dotted paths of every leaf in a nested dict."""
    keys: List[str] = []
    for name, value in tree.items():
        full = f"{prefix}.{name}" if prefix else name
        if isinstance(value, dict):
            keys.extend(flatten_keys(value, full))
        else:
            keys.append(full)
    return keys


def extract_placeholders(value: Any) -> List[str]:
    if not isinstance(value, str):
        return []
    return PLACEHOLDER_PATTERN.findall(value)


class BundleValidator:
    """Validates bundle documents against a base locale.

    Attributes:
        base_locale: Locale whose keys every other bundle must have.
        required_locales: Locales that must be present.
    """

    def __init__(
        self,
        base_locale: str = locales.DEFAULT_LOCALE,
        required_locales: Optional[Sequence[str]] = None,
    ):
        self.base_locale = base_locale
        self.required_locales = list(required_locales or locales.SUPPORTED_LOCALES)

    def validate(
        self,
        bundles: Mapping[str, Any],
        parse_errors: Optional[Mapping[str, str]] = None,
    ) -> ValidationReport:
        """Validate decoded bundle documents.

        Args:
            bundles: Locale code -> decoded bundle document.
            parse_errors: Locale code -> error for files that failed to parse.

        Returns:
            ValidationReport with every finding.
        """
        report = ValidationReport()
        parse_errors = parse_errors or {}

        present: Dict[str, Mapping[str, Any]] = {}
        for locale in self.required_locales:
            if locale in parse_errors:
                report.errors.append(
                    ValidationIssue(
                        IssueCode.PARSE_ERROR,
                        f"Cannot parse bundle for {locale}: {parse_errors[locale]}",
                        locale=locale,
                    )
                )
            elif locale not in bundles:
                report.errors.append(
                    ValidationIssue(
                        IssueCode.MISSING_FILE,
                        f"Bundle not found for {locale}",
                        locale=locale,
                    )
                )
            elif not isinstance(bundles[locale], dict):
                report.errors.append(
                    ValidationIssue(
                        IssueCode.PARSE_ERROR,
                        f"Bundle for {locale} is not an object",
                        locale=locale,
                    )
                )
            else:
                present[locale] = bundles[locale]

        report.stats["locales_loaded"] = len(present)

        self._check_metadata(present, report)
        self._check_completeness(present, report)
        self._check_placeholders(present, report)
        self._check_empty(present, report)

        logger.info(
            "bundles_validated",
            error_count=len(report.errors),
            warning_count=len(report.warnings),
            **report.stats,
        )
        return report

    @staticmethod
    def _translations(document: Mapping[str, Any]) -> Mapping[str, Any]:
        tree = document.get("translations")
        return tree if isinstance(tree, dict) else {}

    def _check_metadata(self, present: Mapping[str, Mapping[str, Any]], report: ValidationReport) -> None:
        for locale, document in present.items():
            for name in REQUIRED_METADATA:
                if not document.get(name):
                    report.errors.append(
                        ValidationIssue(
                            IssueCode.MISSING_METADATA,
                            f'Required field "{name}" missing in {locale}',
                            locale=locale,
                            details={"field": name},
                        )
                    )

            direction = document.get("direction")
            if direction and direction not in ("ltr", "rtl"):
                report.errors.append(
                    ValidationIssue(
                        IssueCode.INVALID_DIRECTION,
                        f'Invalid "direction" value: {direction}',
                        locale=locale,
                        details={"value": direction},
                    )
                )

            if document.get("locale") != locale:
                report.warnings.append(
                    ValidationIssue(
                        IssueCode.LOCALE_CODE_MISMATCH,
                        f'File name ({locale}) does not match "locale" field ({document.get("locale")})',
                        locale=locale,
                        details={"value": document.get("locale")},
                    )
                )

    def _check_completeness(self, present: Mapping[str, Mapping[str, Any]], report: ValidationReport) -> None:
        base = present.get(self.base_locale)
        if base is None:
            report.errors.append(
                ValidationIssue(
                    IssueCode.MISSING_BASE_LOCALE,
                    f"Base locale ({self.base_locale}) not found",
                    locale=self.base_locale,
                )
            )
            return

        base_keys = flatten_keys(self._translations(base))
        base_set = set(base_keys)
        report.stats["total_keys"] = len(base_keys)
        report.completeness[self.base_locale] = 100

        for locale, document in present.items():
            if locale == self.base_locale:
                continue

            keys = flatten_keys(self._translations(document))
            key_set = set(keys)
            missing = [k for k in base_keys if k not in key_set]
            extra = [k for k in keys if k not in base_set]

            if missing:
                report.errors.append(
                    ValidationIssue(
                        IssueCode.MISSING_KEYS,
                        f"{len(missing)} missing key(s)",
                        locale=locale,
                        keys=missing,
                    )
                )
                report.stats["missing_keys"] += len(missing)

            if extra:
                report.warnings.append(
                    ValidationIssue(
                        IssueCode.EXTRA_KEYS,
                        f"{len(extra)} key(s) not present in the base locale",
                        locale=locale,
                        keys=extra,
                    )
                )
                report.stats["extra_keys"] += len(extra)

            covered = len(base_set & key_set)
            report.completeness[locale] = round(covered / len(base_keys) * 100) if base_keys else 100

    def _check_placeholders(self, present: Mapping[str, Mapping[str, Any]], report: ValidationReport) -> None:
        base = present.get(self.base_locale)
        if base is None:
            return
        base_tree = self._translations(base)

        for key in flatten_keys(base_tree):
            expected = extract_placeholders(lookup_path(base_tree, key))
            if not expected:
                continue

            for locale, document in present.items():
                if locale == self.base_locale:
                    continue
                value = lookup_path(self._translations(document), key)
                if value is MISSING:
                    continue
                actual = extract_placeholders(value)
                missing = [p for p in expected if p not in actual]
                extra = [p for p in actual if p not in expected]
                if missing or extra:
                    report.errors.append(
                        ValidationIssue(
                            IssueCode.INCONSISTENT_PLACEHOLDERS,
                            f'Inconsistent placeholders in "{key}"',
                            locale=locale,
                            keys=[key],
                            details={
                                "expected": expected,
                                "actual": actual,
                                "missing": missing,
                                "extra": extra,
                            },
                        )
                    )
                    report.stats["inconsistent_placeholders"] += 1

    def _check_empty(self, present: Mapping[str, Mapping[str, Any]], report: ValidationReport) -> None:
        for locale, document in present.items():
            tree = self._translations(document)
            empty = [
                key
                for key in flatten_keys(tree)
                if isinstance(lookup_path(tree, key), str) and not lookup_path(tree, key).strip()
            ]
            if empty:
                report.warnings.append(
                    ValidationIssue(
                        IssueCode.EMPTY_TRANSLATIONS,
                        f"{len(empty)} empty translation(s)",
                        locale=locale,
                        keys=empty,
                    )
                )


def load_bundles(directory: Path, locale_codes: Iterable[str]):
    """Read ``<locale>.json`` (or .yml/.yaml) files for the given locales.

    Returns:
        Tuple of (documents by locale, parse errors by locale). Locales with
        no file appear in neither.
    """
    finder = FileTranslationLoader(Path(directory))
    documents: Dict[str, Any] = {}
    errors: Dict[str, str] = {}
    for locale in locale_codes:
        path = finder.find_bundle_file(locale)
        if path is None:
            continue
        try:
            documents[locale] = load_bundle_file(path)
        except (OSError, ValueError) as e:
            errors[locale] = str(e)
    return documents, errors


def validate_directory(
    directory: Path,
    base_locale: str = locales.DEFAULT_LOCALE,
    required_locales: Optional[Sequence[str]] = None,
) -> ValidationReport:
    """Validate the bundle files found in a directory."""
    validator = BundleValidator(base_locale, required_locales)
    documents, errors = load_bundles(directory, validator.required_locales)
    return validator.validate(documents, parse_errors=errors)
