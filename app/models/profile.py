from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """A registered member. Owned by the persistence layer, read-only here."""

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    confirmed_project: bool | None = Field(
        default=False, description="Has at least one confirmed project membership"
    )

    @property
    def full_name(self) -> str | None:
        if not self.first_name or not self.last_name:
            return None
        return f"{self.first_name} {self.last_name}"


class Project(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str | None = None
    description: str | None = None
    confirmed: bool | None = False
    industry: str | None = None
    company: str | None = None
    # Repeat likes are stored as repeated ids
    liked_user_ids: tuple[int, ...] = ()
    created_by: int | None = Field(default=None, description="User id of the project creator")


class Experience(BaseModel):
    """One user's participation in one project."""

    model_config = ConfigDict(frozen=True)

    id: int
    user_id: int
    project_id: int
    position: str | None = None
    role: str | None = None
    skills: str | None = None
    tools: str | None = None
    duties: str | None = None
    custom_description: str | None = None
    project_creator: bool = False

    def safe_assign(self, other: "Experience") -> "Experience":
        """
        Copy the member-editable fields from another experience.

        Identity, ownership and the creator flag are kept from self.
        """
        return self.model_copy(
            update={
                "role": other.role,
                "duties": other.duties,
                "tools": other.tools,
                "skills": other.skills,
                "position": other.position,
            }
        )


class ProjectMember(BaseModel):
    """An experience on a project paired with its owner's confirmation state."""

    model_config = ConfigDict(frozen=True)

    experience: Experience
    confirmed: bool = False


class ProfileProperty(BaseModel):
    model_config = ConfigDict(frozen=True)

    property: str
    experience_id: int
    project_id: int


class ProfileProjection(BaseModel):
    """
    Searchable view of a user's properties across all of their experiences.

    Derived on demand, never persisted. Each collection keeps insertion order
    and holds one entry per (property, experience, project) triple.
    """

    model_config = ConfigDict(frozen=True)

    user: User
    rating: int = 0
    skills: tuple[ProfileProperty, ...] = ()
    tools: tuple[ProfileProperty, ...] = ()
    industries: tuple[ProfileProperty, ...] = ()
    companies: tuple[ProfileProperty, ...] = ()
    roles: tuple[ProfileProperty, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.skills or self.tools or self.industries or self.companies or self.roles)


class PropertyQuery(BaseModel):
    """Optional property predicates for profile search, combined with AND."""

    skill: str | None = None
    company: str | None = None
    industry: str | None = None
    tool: str | None = None
    role: str | None = None

    @property
    def is_empty(self) -> bool:
        return not (self.skill or self.company or self.industry or self.tool or self.role)
