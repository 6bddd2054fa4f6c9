"""Friend requests and group invitations: auto-accept settings and flag codes."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime

_APPLY = 0b001
_INVITE = 0b010
_MASTER_OFF = 0b100

_BASE = 0x4E00
_DIGIT_BITS = 14
_DIGIT_MASK = (1 << _DIGIT_BITS) - 1
_FLAG_MASK = (1 << 56) - 1
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1

_WS = "[ \t\n\f\r]"
_DECISION = re.compile(
    rf"(同意|拒绝)(申请|邀请){_WS}*([\u4e00-\u8e00]{{4}}){_WS}*(.*)"
)
_TOGGLE = re.compile(r"(开启|关闭)自动同意(申请|邀请|主人)")


@dataclass
class AutoAccept:
    """Auto-accept settings kept as a small bit set."""

    value: int = 0

    @property
    def apply_on(self) -> bool:
        return bool(self.value & _APPLY)

    @property
    def invite_on(self) -> bool:
        return bool(self.value & _INVITE)

    @property
    def master_off(self) -> bool:
        return bool(self.value & _MASTER_OFF)

    def _set(self, bit: int, on: bool) -> None:
        if on:
            self.value |= bit
        else:
            self.value &= ~bit

    def should_accept_friend(self, from_superuser: bool) -> bool:
        """Whether a friend request is accepted without asking."""
        return self.apply_on or (not self.master_off and from_superuser)

    def should_accept_invite(self, from_superuser: bool) -> bool:
        """Whether a group invitation is accepted without asking."""
        return self.invite_on or (not self.master_off and from_superuser)

    def toggle(self, option: str, target: str) -> str:
        """Apply a "开启"/"关闭" switch to "申请", "邀请" or "主人" and return the reply."""
        if option not in ("开启", "关闭"):
            raise ValueError(f"unknown option: {option!r}")
        on = option == "开启"
        if target == "申请":
            self._set(_APPLY, on)
        elif target == "邀请":
            self._set(_INVITE, on)
        elif target == "主人":
            self._set(_MASTER_OFF, not on)
        else:
            raise ValueError(f"unknown target: {target!r}")
        return f"已设置自动同意{target}为{option}"


@dataclass(frozen=True)
class Decision:
    """A superuser's answer to a pending request."""

    accept: bool
    kind: str
    flag: str
    reason: str

    @property
    def reply(self) -> str:
        return f"已{'同意' if self.accept else '拒绝'}{self.kind}"


def encode_flag(flag: str | int) -> str:
    """Encode the low seven bytes of a decimal request flag as four CJK characters."""
    if isinstance(flag, str):
        if not re.fullmatch(r"[+-]?[0-9]+", flag):
            raise ValueError(f"invalid flag: {flag!r}")
    value = int(flag)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"flag out of range: {flag!r}")
    number = value & _FLAG_MASK
    return "".join(
        chr(_BASE + ((number >> shift) & _DIGIT_MASK)) for shift in (42, 28, 14, 0)
    )


def decode_flag(text: str) -> str:
    """Turn four encoded characters back into the decimal request flag."""
    if len(text) != 4:
        raise ValueError("an encoded flag is four characters long")
    number = 0
    for char in text:
        digit = ord(char) - _BASE
        if not 0 <= digit <= _DIGIT_MASK:
            raise ValueError(f"not an encoded flag character: {char!r}")
        number = (number << _DIGIT_BITS) | digit
    return str(number)


def parse_decision(text: str) -> Decision | None:
    """Parse "同意申请<flag> [reason]" style commands, or return None."""
    found = _DECISION.fullmatch(text)
    if found is None:
        return None
    command, kind, code, reason = found.groups()
    return Decision(
        accept=command == "同意", kind=kind, flag=decode_flag(code), reason=reason
    )


def parse_toggle(text: str) -> tuple[str, str] | None:
    """Parse "开启自动同意申请" style commands into (option, target), or None."""
    found = _TOGGLE.fullmatch(text)
    return (found.group(1), found.group(2)) if found else None


def _stamp(when: datetime | float) -> str:
    moment = when if isinstance(when, datetime) else datetime.fromtimestamp(when)
    return moment.strftime("%Y-%m-%d %H:%M:%S")


def format_friend_notice(
    when: datetime | float,
    username: str,
    user_id: int,
    comment: str,
    flag: str,
    accepted: bool,
) -> list[str]:
    """Build the forwarded message nodes telling the superuser about a friend request."""
    user = f"\n用户:[{username}]({user_id})\n的好友请求:{comment}"
    if accepted:
        return [f"已自动同意在{_stamp(when)}收到来自{user}\nflag:{flag}"]
    return [
        f"在{_stamp(when)}收到来自{user}"
        "\n请在下方复制flag并在前面加上:\n同意/拒绝申请，来决定同意还是拒绝",
        flag,
    ]


def format_invite_notice(
    when: datetime | float,
    username: str,
    user_id: int,
    group_name: str,
    group_id: int,
    flag: str,
    accepted: bool,
) -> list[str]:
    """Build the forwarded message nodes telling the superuser about a group invitation."""
    body = (
        f"\n用户:[{username}]({user_id})的群聊邀请"
        f"\n群聊:[{group_name}]({group_id})"
    )
    if accepted:
        return [f"已自动同意在{_stamp(when)}收到来自{body}\nflag:{flag}"]
    return [
        f"在{_stamp(when)}收到来自{body}"
        "\n请在下方复制flag并在前面加上:\n同意/拒绝邀请，来决定同意还是拒绝",
        flag,
    ]