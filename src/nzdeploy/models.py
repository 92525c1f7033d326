"""Domain models."""

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict


@dataclass
class EnvVar:
    key: str
    value: str


class Category(Enum):
    """Deployment categories offered by the deployment endpoint.

    The enum value is the label sent on the wire and shown in the UI.
    """

    STATIC_SITE = "Static Site"
    DYNAMIC_SITE = "Dynamic Site"
    BACKEND = "Backend"
    SERVICES = "Services"

    @property
    def available(self) -> bool:
        return self in (Category.STATIC_SITE, Category.BACKEND)

    @classmethod
    def from_label(cls, label: str) -> "Category":
        """Look up a category by its label, ignoring case and surrounding whitespace."""
        wanted = label.strip().lower()
        for category in cls:
            if category.value.lower() == wanted or category.name.lower() == wanted:
                return category
        raise ValueError(f"Unknown deployment category: {label!r}")


class Repository(BaseModel):
    """A repository as returned by the hosting API (``GET /user/repos``)."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    full_name: str = ""
    description: str | None = None
    html_url: str = ""
    stargazers_count: int = 0
    updated_at: str = ""
    language: str | None = None
    private: bool = False


class Identity(BaseModel):
    """The signed-in user as reported by the identity provider."""

    model_config = ConfigDict(extra="ignore")

    login: str
    name: str | None = None
    avatar_url: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.login


@dataclass
class DeploymentRequest:
    """A finished project descriptor, ready for the deployment endpoint."""

    repo: str
    category: Category
    owner: str
    access_token: str
    env_variables: dict[str, str] = field(default_factory=dict)

    def to_payload(self) -> dict[str, object]:
        """Return the JSON body expected by ``POST /project``."""
        return {
            "repo": self.repo,
            "category": self.category.value,
            "owner": self.owner,
            "accessToken": self.access_token,
            "envVariables": dict(self.env_variables),
        }
