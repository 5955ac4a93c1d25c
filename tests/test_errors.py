import errno

import pytest

from cubcaster.errors import CubError, ErrorCode, error_message, format_error


def test_messages_from_source():
    assert error_message(ErrorCode.INVALID_MAP) == "Invalid map."
    assert error_message(ErrorCode.MLX_ERROR) == "MLX error"
    assert error_message(ErrorCode.INVALID_MAP_SIZE) == "Invalid map size."


def test_message_accepts_plain_int():
    assert error_message(int(ErrorCode.INVALID_MAP)) == error_message(
        ErrorCode.INVALID_MAP
    )


def test_unknown_code_rejected():
    with pytest.raises(ValueError):
        error_message(999)


def test_exception_text_is_message():
    err = CubError(ErrorCode.PLAYER_OFF_MAP)
    assert str(err) == error_message(ErrorCode.PLAYER_OFF_MAP)
    assert err.code is ErrorCode.PLAYER_OFF_MAP


def test_format_error_contains_header_and_message():
    text = format_error(CubError(ErrorCode.INVALID_MAP))
    lines = text.splitlines()
    assert "Error" in lines[0]
    assert lines[1] == "Invalid map."


def test_syscall_error_uses_os_message():
    exc = OSError(errno.ENOENT, "No such file or directory")
    err = CubError(ErrorCode.SYSCALL_ERROR, exc)
    assert format_error(err).splitlines()[1] == "No such file or directory"
    assert err.exit_status() == errno.ENOENT


def test_exit_status_without_detail_is_code():
    err = CubError(ErrorCode.INVALID_COLOUR_PARAM)
    assert err.exit_status() == int(ErrorCode.INVALID_COLOUR_PARAM)


def test_wrong_args_error_formats_its_message():
    err = CubError(ErrorCode.WRONG_ARGS_NO)
    lines = format_error(err).splitlines()
    assert lines[1] == error_message(ErrorCode.WRONG_ARGS_NO)
    assert err.exit_status() == int(ErrorCode.WRONG_ARGS_NO)