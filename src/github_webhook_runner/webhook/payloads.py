"""GitHub webhook payload schemas.

Each event name maps to exactly one model class (see `PAYLOAD_TYPES`).
Unknown JSON keys are ignored, so GitHub adding fields never breaks decoding.

A `null` in any field decodes to that field's default.

Timestamps: GitHub mixes RFC 3339 strings, unix timestamps (push payloads) and
`null`. Pydantic's lax datetime parsing accepts all three.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

Timestamp = datetime | None


class Model(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("*", mode="before")
    @classmethod
    def null_is_default(cls, value: Any, info: ValidationInfo) -> Any:
        # GitHub sends `null` for many plain fields (e.g. `pusher.email`).
        if value is not None or info.field_name is None:
            return value
        field = cls.model_fields[info.field_name]
        if field.is_required():
            return value
        return field.get_default(call_default_factory=True)


class Payload(Model):
    """Base class of every top-level event payload."""


# Shared objects


class User(Model):
    login: str = ""
    id: int = 0
    avatar_url: str = ""
    html_url: str = ""
    type: str = ""
    site_admin: bool = False


class CommitAuthor(Model):
    name: str = ""
    email: str = ""
    username: str = ""
    date: Timestamp = None


class Repository(Model):
    id: int = 0
    name: str = ""
    full_name: str = ""
    owner: User | CommitAuthor | None = None
    private: bool = False
    html_url: str = ""
    description: str | None = None
    fork: bool = False
    url: str = ""
    created_at: Timestamp = None
    updated_at: Timestamp = None
    pushed_at: Timestamp = None
    homepage: str | None = None
    language: str | None = None
    default_branch: str = ""
    master_branch: str = ""


class Organization(Model):
    login: str = ""
    id: int = 0
    url: str = ""
    description: str | None = None


class Commit(Model):
    id: str = ""
    tree_id: str = ""
    distinct: bool = False
    message: str = ""
    timestamp: Timestamp = None
    url: str = ""
    author: CommitAuthor = Field(default_factory=CommitAuthor)
    committer: CommitAuthor = Field(default_factory=CommitAuthor)
    added: list[str] = Field(default_factory=list)
    removed: list[str] = Field(default_factory=list)
    modified: list[str] = Field(default_factory=list)


class HookConfig(Model):
    url: str = ""
    content_type: str = ""
    insecure_ssl: str = ""


class Hook(Model):
    id: int = 0
    name: str = ""
    type: str = ""
    active: bool = False
    events: list[str] = Field(default_factory=list)
    config: HookConfig = Field(default_factory=HookConfig)
    created_at: Timestamp = None
    updated_at: Timestamp = None


class Label(Model):
    name: str = ""
    color: str = ""
    url: str = ""


class Milestone(Model):
    number: int = 0
    title: str = ""
    state: str = ""


class Issue(Model):
    id: int = 0
    number: int = 0
    title: str = ""
    body: str | None = None
    state: str = ""
    user: User = Field(default_factory=User)
    labels: list[Label] = Field(default_factory=list)
    assignee: User | None = None
    milestone: Milestone | None = None
    comments: int = 0
    html_url: str = ""
    created_at: Timestamp = None
    updated_at: Timestamp = None
    closed_at: Timestamp = None


class Comment(Model):
    id: int = 0
    body: str = ""
    user: User = Field(default_factory=User)
    html_url: str = ""
    path: str | None = None
    position: int | None = None
    line: int | None = None
    commit_id: str = ""
    created_at: Timestamp = None
    updated_at: Timestamp = None


class Ref(Model):
    label: str = ""
    ref: str = ""
    sha: str = ""
    user: User = Field(default_factory=User)
    repo: Repository | None = None


class PullRequest(Model):
    id: int = 0
    number: int = 0
    state: str = ""
    title: str = ""
    body: str | None = None
    user: User = Field(default_factory=User)
    html_url: str = ""
    merged: bool = False
    merged_by: User | None = None
    merge_commit_sha: str | None = None
    head: Ref = Field(default_factory=Ref)
    base: Ref = Field(default_factory=Ref)
    created_at: Timestamp = None
    updated_at: Timestamp = None
    closed_at: Timestamp = None
    merged_at: Timestamp = None


class Release(Model):
    id: int = 0
    tag_name: str = ""
    target_commitish: str = ""
    name: str | None = None
    body: str | None = None
    draft: bool = False
    prerelease: bool = False
    author: User = Field(default_factory=User)
    html_url: str = ""
    created_at: Timestamp = None
    published_at: Timestamp = None


class Gist(Model):
    id: str = ""
    url: str = ""
    html_url: str = ""
    description: str | None = None
    public: bool = False


class WikiPage(Model):
    page_name: str = ""
    title: str = ""
    summary: str | None = None
    action: str = ""
    sha: str = ""
    html_url: str = ""


class Deployment(Model):
    id: int = 0
    sha: str = ""
    ref: str = ""
    task: str = ""
    environment: str = ""
    description: str | None = None
    creator: User = Field(default_factory=User)
    created_at: Timestamp = None


class DeploymentStatusInfo(Model):
    id: int = 0
    state: str = ""
    description: str | None = None
    target_url: str | None = None
    creator: User = Field(default_factory=User)
    created_at: Timestamp = None


class Team(Model):
    id: int = 0
    name: str = ""
    slug: str = ""
    permission: str = ""


class PageBuild(Model):
    url: str = ""
    status: str = ""
    commit: str = ""
    pusher: User = Field(default_factory=User)
    created_at: Timestamp = None


# Events


class CommitCommentEvent(Payload):
    action: str = ""
    comment: Comment = Field(default_factory=Comment)
    repository: Repository = Field(default_factory=Repository)
    sender: User = Field(default_factory=User)


class CreateEvent(Payload):
    ref: str = ""
    ref_type: str = ""
    master_branch: str = ""
    description: str | None = None
    pusher_type: str = ""
    repository: Repository = Field(default_factory=Repository)
    sender: User = Field(default_factory=User)


class DeleteEvent(Payload):
    ref: str = ""
    ref_type: str = ""
    pusher_type: str = ""
    repository: Repository = Field(default_factory=Repository)
    sender: User = Field(default_factory=User)


class DeploymentEvent(Payload):
    deployment: Deployment = Field(default_factory=Deployment)
    repository: Repository = Field(default_factory=Repository)
    sender: User = Field(default_factory=User)


class DeploymentStatusEvent(Payload):
    deployment_status: DeploymentStatusInfo = Field(default_factory=DeploymentStatusInfo)
    deployment: Deployment = Field(default_factory=Deployment)
    repository: Repository = Field(default_factory=Repository)
    sender: User = Field(default_factory=User)


class ForkEvent(Payload):
    forkee: Repository = Field(default_factory=Repository)
    repository: Repository = Field(default_factory=Repository)
    sender: User = Field(default_factory=User)


class ForkApplyEvent(Payload):
    head: str = ""
    before: str = ""
    after: str = ""
    repository: Repository = Field(default_factory=Repository)
    sender: User = Field(default_factory=User)


class GistEvent(Payload):
    action: str = ""
    gist: Gist = Field(default_factory=Gist)
    sender: User = Field(default_factory=User)


class GollumEvent(Payload):
    pages: list[WikiPage] = Field(default_factory=list)
    repository: Repository = Field(default_factory=Repository)
    sender: User = Field(default_factory=User)


class IssueCommentEvent(Payload):
    action: str = ""
    issue: Issue = Field(default_factory=Issue)
    comment: Comment = Field(default_factory=Comment)
    repository: Repository = Field(default_factory=Repository)
    sender: User = Field(default_factory=User)


class IssuesEvent(Payload):
    action: str = ""
    issue: Issue = Field(default_factory=Issue)
    label: Label | None = None
    assignee: User | None = None
    repository: Repository = Field(default_factory=Repository)
    sender: User = Field(default_factory=User)


class MemberEvent(Payload):
    action: str = ""
    member: User = Field(default_factory=User)
    repository: Repository = Field(default_factory=Repository)
    sender: User = Field(default_factory=User)


class MembershipEvent(Payload):
    action: str = ""
    scope: str = ""
    member: User = Field(default_factory=User)
    team: Team = Field(default_factory=Team)
    organization: Organization = Field(default_factory=Organization)
    sender: User = Field(default_factory=User)


class PageBuildEvent(Payload):
    id: int = 0
    build: PageBuild = Field(default_factory=PageBuild)
    repository: Repository = Field(default_factory=Repository)
    sender: User = Field(default_factory=User)


class PingEvent(Payload):
    zen: str = ""
    hook_id: int = 0
    hook: Hook = Field(default_factory=Hook)
    repository: Repository | None = None
    sender: User | None = None


class PublicEvent(Payload):
    repository: Repository = Field(default_factory=Repository)
    sender: User = Field(default_factory=User)


class PullRequestEvent(Payload):
    action: str = ""
    number: int = 0
    pull_request: PullRequest = Field(default_factory=PullRequest)
    label: Label | None = None
    repository: Repository = Field(default_factory=Repository)
    sender: User = Field(default_factory=User)


class PullRequestReviewCommentEvent(Payload):
    action: str = ""
    comment: Comment = Field(default_factory=Comment)
    pull_request: PullRequest = Field(default_factory=PullRequest)
    repository: Repository = Field(default_factory=Repository)
    sender: User = Field(default_factory=User)


class PushEvent(Payload):
    ref: str = ""
    before: str = ""
    after: str = ""
    created: bool = False
    deleted: bool = False
    forced: bool = False
    base_ref: str | None = None
    compare: str = ""
    commits: list[Commit] = Field(default_factory=list)
    head_commit: Commit | None = None
    repository: Repository = Field(default_factory=Repository)
    pusher: CommitAuthor = Field(default_factory=CommitAuthor)
    sender: User = Field(default_factory=User)


class ReleaseEvent(Payload):
    action: str = ""
    release: Release = Field(default_factory=Release)
    repository: Repository = Field(default_factory=Repository)
    sender: User = Field(default_factory=User)


class RepositoryEvent(Payload):
    action: str = ""
    repository: Repository = Field(default_factory=Repository)
    organization: Organization | None = None
    sender: User = Field(default_factory=User)


class StatusEvent(Payload):
    id: int = 0
    sha: str = ""
    name: str = ""
    target_url: str | None = None
    context: str = ""
    description: str | None = None
    state: str = ""
    branches: list[dict[str, object]] = Field(default_factory=list)
    repository: Repository = Field(default_factory=Repository)
    sender: User = Field(default_factory=User)


class TeamAddEvent(Payload):
    team: Team = Field(default_factory=Team)
    repository: Repository = Field(default_factory=Repository)
    organization: Organization = Field(default_factory=Organization)
    sender: User = Field(default_factory=User)


class WatchEvent(Payload):
    action: str = ""
    repository: Repository = Field(default_factory=Repository)
    sender: User = Field(default_factory=User)


PAYLOAD_TYPES: dict[str, type[Payload]] = {
    "commit_comment": CommitCommentEvent,
    "create": CreateEvent,
    "delete": DeleteEvent,
    "deployment": DeploymentEvent,
    "deployment_status": DeploymentStatusEvent,
    "fork": ForkEvent,
    "fork_apply": ForkApplyEvent,
    "gist": GistEvent,
    "gollum": GollumEvent,
    "issue_comment": IssueCommentEvent,
    "issues": IssuesEvent,
    "member": MemberEvent,
    "membership": MembershipEvent,
    "page_build": PageBuildEvent,
    "ping": PingEvent,
    "public": PublicEvent,
    "pull_request": PullRequestEvent,
    "pull_request_review_comment": PullRequestReviewCommentEvent,
    "push": PushEvent,
    "release": ReleaseEvent,
    "repository": RepositoryEvent,
    "status": StatusEvent,
    "team_add": TeamAddEvent,
    "watch": WatchEvent,
}
