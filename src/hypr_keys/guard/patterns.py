"""Pattern tables for the danger detector.

Each builder returns fresh immutable data so every detector owns its tables.
"""

from __future__ import annotations

import re
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict

from .models.danger import DangerLevel


class CriticalPattern(BaseModel):
    """A regex for irreversible system destruction plus its messages."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    pattern: re.Pattern[str]
    reason: str
    recommendation: str
    label: str


class ArgumentRule(BaseModel):
    """Matches when every group has at least one substring in the command."""

    model_config = ConfigDict(frozen=True)

    label: str
    groups: Tuple[Tuple[str, ...], ...]
    level: DangerLevel = DangerLevel.DANGEROUS
    reason: str
    recommendation: str

    def matches(self, command: str) -> bool:
        return all(any(needle in command for needle in group) for group in self.groups)


def build_critical_patterns() -> List[CriticalPattern]:
    return [
        CriticalPattern(
            identifier="root-delete",
            # rm with r and f flags in either order, combined or separate, aimed at /
            pattern=re.compile(r"\brm\s+(?:.*[rR].*[fF]|.*[fF].*[rR]).*\s+/\s*$"),
            reason="Recursive filesystem deletion from the root directory",
            recommendation="NEVER execute this command. It will destroy your entire system.",
            label="rm -rf /",
        ),
        CriticalPattern(
            identifier="disk-overwrite",
            pattern=re.compile(
                r"\bdd\s+.*\bof=/dev/(?:sd[a-z]|hd[a-z]|vd[a-z]|nvme\d+n\d+|mmcblk\d+)"
            ),
            reason="Direct write to a disk device - destroys all data and the partition table",
            recommendation="NEVER execute this command. Remove this keybinding immediately.",
            label="dd to disk device",
        ),
        CriticalPattern(
            identifier="fork-bomb",
            pattern=re.compile(r":\(\)\s*\{\s*:\s*\|\s*:\s*&\s*\}\s*;\s*:"),
            reason="Fork bomb detected - exponential process spawning causes resource exhaustion",
            recommendation="NEVER execute this command. It will hang or crash the system.",
            label="fork bomb",
        ),
    ]


def build_argument_rules() -> List[ArgumentRule]:
    return [
        ArgumentRule(
            label="chmod 777",
            groups=(("chmod",), ("777",)),
            reason="Setting 777 permissions makes files world-writable and executable",
            recommendation="Use restrictive permissions like 644 (files) or 755 (executables).",
        ),
        ArgumentRule(
            label="pipe to shell",
            groups=(("| sh", "|sh", "| bash", "|bash"), ("curl", "wget", "fetch")),
            reason="Downloading and executing untrusted code (remote code execution pattern)",
            recommendation="Download first, inspect the script, then run it manually if safe.",
        ),
        ArgumentRule(
            label="rm -rf",
            groups=(("rm",), ("-rf", "-fr", "-Rf", "-fR", "-RF", "-FR")),
            reason="Recursive file deletion - can destroy entire directories",
            recommendation="Double-check the path. Consider a trash utility for reversibility.",
        ),
        ArgumentRule(
            label="iptables -F",
            groups=(("iptables",), ("-F",)),
            reason="Flushing firewall rules removes all network protection",
            recommendation="Only do this if you understand the security implications.",
        ),
    ]


def build_dangerous_commands() -> frozenset[str]:
    return frozenset(
        {
            # file destruction
            "shred",
            "srm",
            "wipe",
            # permissions and ownership
            "chmod",
            "chown",
            # privilege escalation
            "sudo",
            "doas",
            "su",
            "pkexec",
            # disks
            "mkfs",
            "fdisk",
            "parted",
            "wipefs",
            # firewall and services
            "iptables",
            "ufw",
            "firewalld",
            "systemctl",
        }
    )


def build_suspicious_commands() -> frozenset[str]:
    return frozenset(
        {
            # encoders
            "base64",
            "xxd",
            "uuencode",
            # downloaders
            "wget",
            "curl",
            "fetch",
            "aria2c",
            # background execution
            "nohup",
            "disown",
            "screen",
            "tmux",
            # dynamic evaluation
            "eval",
            "exec",
            "source",
            # raw network
            "nc",
            "netcat",
            "ncat",
        }
    )


def build_safe_commands() -> frozenset[str]:
    return frozenset(
        {
            # browsers
            "firefox",
            "chromium",
            "brave",
            "vivaldi",
            "opera",
            "qutebrowser",
            # terminals
            "kitty",
            "alacritty",
            "foot",
            "wezterm",
            "terminator",
            "st",
            # editors
            "nvim",
            "vim",
            "emacs",
            "code",
            "nano",
            "gedit",
            "kate",
            # file managers
            "nautilus",
            "thunar",
            "dolphin",
            "pcmanfm",
            # desktop tools
            "pavucontrol",
            "nm-applet",
            "blueman",
            # media
            "mpv",
            "vlc",
            "spotify",
            "obs",
        }
    )
