from dataclasses import dataclass, field
from datetime import datetime
from typing import List


@dataclass
class User:
    id: int
    email: str
    password_hash: str
    first_name: str
    last_name: str
    created_at: datetime
    roles: List[str] = field(default_factory=lambda: ["ROLE_USER"])

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
