"""Platform/architecture/package combinations published for each release."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Platform:
    os: str
    arch: str
    extension: str

    @property
    def descriptor(self) -> str:
        """Suffix used in release asset names, e.g. 'linux-x64.tar.gz'."""
        return f"{self.os}-{self.arch}.{self.extension}"

    @property
    def package_type(self) -> str:
        return self.extension.lower()


PLATFORMS: tuple[Platform, ...] = (
    Platform("linux", "arm", "AppImage"),
    Platform("linux", "arm", "tar.gz"),
    Platform("linux", "arm64", "AppImage"),
    Platform("linux", "arm64", "tar.gz"),
    Platform("linux", "ia32", "AppImage"),
    Platform("linux", "ia32", "tar.gz"),
    Platform("linux", "x64", "AppImage"),
    Platform("linux", "x64", "tar.gz"),
    Platform("mac", "x64", "dmg"),
    Platform("mac", "x64", "tar.gz"),
    Platform("win", "x64", "exe"),
)
