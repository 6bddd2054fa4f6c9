from datetime import datetime

import pytest

from zeroplugins.event import (
    AutoAccept,
    decode_flag,
    encode_flag,
    format_friend_notice,
    format_invite_notice,
    parse_decision,
    parse_toggle,
)


def test_default_settings_accept_only_superuser():
    settings = AutoAccept()
    assert settings.should_accept_friend(True) is True
    assert settings.should_accept_friend(False) is False
    assert settings.should_accept_invite(True) is True
    assert settings.should_accept_invite(False) is False


def test_toggle_apply_on_accepts_everyone():
    settings = AutoAccept()
    reply = settings.toggle("开启", "申请")
    assert reply == "已设置自动同意申请为开启"
    assert settings.value == 0b001
    assert settings.should_accept_friend(False) is True
    assert settings.should_accept_invite(False) is False


def test_toggle_invite_then_off():
    settings = AutoAccept()
    settings.toggle("开启", "邀请")
    assert settings.should_accept_invite(False) is True
    settings.toggle("关闭", "邀请")
    assert settings.should_accept_invite(False) is False
    assert settings.value == 0


def test_master_off_stops_superuser_auto_accept():
    settings = AutoAccept()
    settings.toggle("关闭", "主人")
    assert settings.master_off is True
    assert settings.should_accept_friend(True) is False
    settings.toggle("开启", "主人")
    assert settings.should_accept_friend(True) is True


def test_toggle_rejects_unknown_target():
    with pytest.raises(ValueError):
        AutoAccept().toggle("开启", "别的")


@pytest.mark.parametrize("flag", ["0", "1", "12345678901", str((1 << 56) - 1)])
def test_flag_round_trip(flag):
    code = encode_flag(flag)
    assert len(code) == 4
    assert all("\u4e00" <= ch <= "\u8dff" for ch in code)
    assert decode_flag(code) == flag


def test_zero_flag_encoding():
    assert encode_flag("0") == "一一一一"
    assert decode_flag("一一一一") == "0"


@pytest.mark.parametrize("flag", ["abc", "", "1" * 30])
def test_encode_flag_rejects_bad_input(flag):
    with pytest.raises(ValueError):
        encode_flag(flag)


def test_decode_flag_rejects_bad_input():
    with pytest.raises(ValueError):
        decode_flag("一一")
    with pytest.raises(ValueError):
        decode_flag("abcd")


def test_parse_decision():
    code = encode_flag("987654321")
    decision = parse_decision(f"拒绝邀请 {code} no thanks")
    assert decision.accept is False
    assert decision.kind == "邀请"
    assert decision.flag == "987654321"
    assert decision.reason == "no thanks"
    assert decision.reply == "已拒绝邀请"


def test_parse_decision_without_reason():
    code = encode_flag("42")
    decision = parse_decision(f"同意申请{code}")
    assert decision.accept is True
    assert decision.flag == "42"
    assert decision.reason == ""
    assert decision.reply == "已同意申请"


def test_parse_decision_ignores_other_text():
    assert parse_decision("hello") is None


def test_parse_toggle():
    assert parse_toggle("开启自动同意邀请") == ("开启", "邀请")
    assert parse_toggle("关闭自动同意主人") == ("关闭", "主人")
    assert parse_toggle("开启自动同意别的") is None


def test_friend_notice_forms():
    when = datetime(2022, 10, 1, 12, 0, 0)
    code = encode_flag("7")
    accepted = format_friend_notice(when, "alice", 10001, "hi", code, True)
    assert len(accepted) == 1
    assert accepted[0].startswith("已自动同意在2022-10-01 12:00:00收到来自")
    assert accepted[0].endswith("flag:" + code)
    assert "的好友请求:hi" in accepted[0]
    asking = format_friend_notice(when, "alice", 10001, "hi", code, False)
    assert len(asking) == 2
    assert asking[1] == code
    assert asking[0].endswith("同意/拒绝申请，来决定同意还是拒绝")


def test_invite_notice_forms():
    when = datetime(2022, 10, 1, 12, 0, 0)
    code = encode_flag("8")
    accepted = format_invite_notice(when, "bob", 10002, "chat", 20003, code, True)
    assert len(accepted) == 1
    assert "\n群聊:[chat](20003)" in accepted[0]
    assert accepted[0].endswith("flag:" + code)
    asking = format_invite_notice(when, "bob", 10002, "chat", 20003, code, False)
    assert asking[1] == code
    assert "用户:[bob](10002)的群聊邀请" in asking[0]
    assert asking[0].endswith("同意/拒绝邀请，来决定同意还是拒绝")