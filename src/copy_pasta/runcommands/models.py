from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Field aliases are the on-disk key names of ~/.copy-pastarc.


class Target(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    name: str = Field(..., description="Unique name of the target within the rc file.")
    access_key: str = Field(..., alias="accesskey", repr=False, description="Object store access key.")
    secret_access_key: str = Field(..., alias="secretaccesskey", repr=False, description="Object store secret key.")
    bucket_name: str = Field(..., alias="bucketname", description="Bucket holding the clipboard object.")


class RunCommands(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    current_target: Optional[Target] = Field(None, alias="currenttarget", description="Target used when none is named.")
    targets: dict[str, Target] = Field(default_factory=dict, description="All known targets keyed by name.")

    def with_target(self, target: Target) -> RunCommands:
        targets = dict(self.targets)
        targets[target.name] = target
        return RunCommands(current_target=target, targets=targets)

    def resolve(self, name: str | None = None) -> Target | None:
        if name is None:
            return self.current_target
        return self.targets.get(name)

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
