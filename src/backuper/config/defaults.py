"""Built-in backup tables used when no configuration file overrides them."""

from .schema import BackupDir, DestinationConfig, ProfileConfig, WslConfig

MAC_BACKUP_DIRS = [
    BackupDir.home("Documents"),
    BackupDir.home("Pictures"),
    BackupDir.home("Music"),
    BackupDir.home("Movies"),
    BackupDir.home("Library/CloudStorage/Dropbox"),
    BackupDir.home("Library/Application Support/Anki2"),
]

WINDOWS_BACKUP_DIRS = [
    BackupDir.home("Documents"),
    BackupDir.home("Pictures"),
    BackupDir.home("Music"),
    BackupDir.home("Videos"),
    BackupDir.home("ghidra_scripts"),
    BackupDir.home("AppData\\Roaming"),
    BackupDir.home("AppData\\Local\\osu!"),
    BackupDir.home("AppData\\Local\\osulazer"),
    BackupDir.home("AppData\\Local\\OpenTabletDriver"),
    BackupDir.home("VirtualBox VMs"),
    BackupDir.home("Dropbox"),
    BackupDir.root("C:\\Program Files (x86)\\Steam\\steamapps\\common"),
    BackupDir.root("C:\\tools"),
]

EXCLUDE_PATTERNS = [
    "node_modules/**",
    ".cache/**",
    ".vscode/**",
    ".npm/**",
    ".vscode-server/**",
    "*.photoslibrary",
    ".DS_Store",
    "build*/**",
]

WSL_BREW = "/home/linuxbrew/.linuxbrew/bin/brew"
WSL_RESTIC = "/home/linuxbrew/.linuxbrew/bin/restic"

WINDOWS_UPGRADE_COMMANDS = [
    ["choco", "upgrade", "all"],
    ["wsl.exe", "sudo", "apt", "update"],
    ["wsl.exe", "sudo", "apt", "upgrade", "-y"],
    ["wsl.exe", WSL_BREW, "upgrade"],
]

MACOS_UPGRADE_COMMANDS = [
    ["brew", "upgrade"],
]


def windows_profile() -> ProfileConfig:
    return ProfileConfig(
        label="Windows",
        tag="Windows",
        backup_dirs=list(WINDOWS_BACKUP_DIRS),
        upgrade_commands=[list(cmd) for cmd in WINDOWS_UPGRADE_COMMANDS],
        extra_backup_args=["--use-fs-snapshot"],
        destinations=[
            DestinationConfig(
                name="Local",
                repository="Z:\\restic",
                wsl_repository="/mnt/c/restic",
            ),
            DestinationConfig(name="Cloud", cloud_credentials=True),
        ],
        # WSL user names need not match the Windows one; set [windows.wsl] backup_path
        wsl=WslConfig(restic_path=WSL_RESTIC),
    )


def macos_profile() -> ProfileConfig:
    return ProfileConfig(
        label="macOS",
        tag="macOS",
        backup_dirs=list(MAC_BACKUP_DIRS),
        upgrade_commands=[list(cmd) for cmd in MACOS_UPGRADE_COMMANDS],
        destinations=[DestinationConfig(name="Cloud", cloud_credentials=True)],
    )


def default_profiles() -> dict[str, ProfileConfig]:
    return {"windows": windows_profile(), "macos": macos_profile()}
