from typing import Dict, List, Sequence

from films.validation import Violation


class NotFoundError(Exception):
    def __init__(self, film_id: int):
        super().__init__(f"Film {film_id} not found")
        self.film_id = film_id


class ValidationError(Exception):
    def __init__(self, violations: Sequence[Violation]):
        super().__init__("One or more validation errors occurred.")
        self.violations = list(violations)

    def as_dict(self) -> Dict[str, List[str]]:
        errors: Dict[str, List[str]] = {}
        for field, message in self.violations:
            errors.setdefault(field, []).append(message)
        return errors
