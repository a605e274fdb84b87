from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# Version tag (original text) -> URL for remote releases or executable path for installed ones.
VersionCatalog = dict[str, str]


class ReleaseAsset(BaseModel):
    """A named downloadable artifact attached to a remote release."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str = Field(validation_alias=AliasChoices("url", "browser_download_url"))


class RemoteRelease(BaseModel):
    """A release published by the hosting provider: its tag and assets."""

    model_config = ConfigDict(frozen=True)

    tag: str = Field(validation_alias=AliasChoices("tag", "tag_name"))
    assets: list[ReleaseAsset] = Field(default_factory=list)
