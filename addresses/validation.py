"""Field rules for address input."""
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from .db.models import Address
from .exceptions import ValidationError
from .utils.normalization import clean_field, coerce_bool, normalize_code

FLAG_FIELDS = ('is_primary', 'is_billing', 'is_shipping')
CODE_FIELDS = ('state', 'country')


@dataclass(frozen=True)
class FieldRule:
    required: bool = False
    max_length: Optional[int] = None
    exact_length: Optional[int] = None
    pattern: Optional[str] = None
    pattern_message: str = 'has an invalid format'


ADDRESS_RULES: Dict[str, FieldRule] = {
    'addressee': FieldRule(max_length=100),
    'organization': FieldRule(max_length=100),
    'line1': FieldRule(required=True, max_length=255),
    'line2': FieldRule(max_length=255),
    'city': FieldRule(required=True, max_length=100),
    'state': FieldRule(exact_length=2, pattern=r'^[A-Z0-9]+$',
                       pattern_message='must be a state or province code'),
    'postal_code': FieldRule(max_length=20, pattern=r'^[A-Za-z0-9][A-Za-z0-9 \-]*$'),
    'country': FieldRule(required=True, exact_length=2, pattern=r'^[A-Z]+$',
                         pattern_message='must be a country code'),
    'phone': FieldRule(max_length=30, pattern=r'^[0-9+().\-\s]+(\s*(x|ext\.?)\s*[0-9]+)?$'),
}


class AddressValidator:
    """Normalizes address input and checks it against a rules table."""

    def __init__(self, rules: Optional[Mapping[str, FieldRule]] = None):
        self.rules = dict(ADDRESS_RULES if rules is None else rules)

    def normalize(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        """Keep fillable fields only and clean their values.

        Raises:
            ValidationError: If a flag value is not a boolean
        """
        data = {}
        errors: Dict[str, List[str]] = {}
        for name, value in fields.items():
            if name not in Address.FILLABLE:
                continue
            if name in FLAG_FIELDS:
                try:
                    data[name] = coerce_bool(value)
                except ValueError:
                    errors.setdefault(name, []).append('must be true or false')
            elif name in CODE_FIELDS:
                data[name] = normalize_code(value)
            else:
                data[name] = clean_field(value)
        if errors:
            raise ValidationError(errors)
        return data

    def errors(self, data: Mapping[str, Any]) -> Dict[str, List[str]]:
        """Check normalized data. Returns messages keyed by field."""
        errors: Dict[str, List[str]] = {}
        for name, rule in self.rules.items():
            value = data.get(name)
            messages = self._check(rule, value)
            if messages:
                errors[name] = messages
        return errors

    def validate(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Return the data unchanged if it passes.

        Raises:
            ValidationError: With every failing field
        """
        errors = self.errors(data)
        if errors:
            raise ValidationError(errors)
        return dict(data)

    def passes(self, fields: Mapping[str, Any]) -> bool:
        try:
            self.validate(self.normalize(fields))
        except ValidationError:
            return False
        return True

    def fails(self, fields: Mapping[str, Any]) -> bool:
        return not self.passes(fields)

    def _check(self, rule: FieldRule, value: Any) -> List[str]:
        if value is None or value == '':
            return ['is required'] if rule.required else []

        text = str(value)
        messages = []
        if rule.exact_length is not None and len(text) != rule.exact_length:
            messages.append(f'must be exactly {rule.exact_length} characters')
        if rule.max_length is not None and len(text) > rule.max_length:
            messages.append(f'may not be longer than {rule.max_length} characters')
        if rule.pattern is not None and not re.match(rule.pattern, text):
            messages.append(rule.pattern_message)
        return messages
