"""End-to-end tests of the Shell main loop with real child processes"""
import os
import signal
import time

import pytest

from smallsh.config import ShellConfig
from smallsh.constants import EXIT_FAILURE, EXIT_OK
from smallsh.signals import SignalHandler
from smallsh.state import ShellState
from smallsh.status import TerminationStatus


def wait_until_reaped(shell, timeout=5.0):
    deadline = time.time() + timeout
    while len(shell.jobs) and time.time() < deadline:
        shell.reap_background()
        time.sleep(0.02)


def test_foreground_command_then_status(make_shell, tmp_path, capfd):
    shell, stdout, _ = make_shell("echo hello\nstatus\nexit\n")
    assert shell.run() == EXIT_OK
    assert capfd.readouterr().out == 'hello\n'
    assert stdout.getvalue() == ': : exit value 0\n: '


def test_failed_command_status(make_shell):
    shell, stdout, _ = make_shell()
    shell.execute_line("false\n")
    shell.execute_line("status\n")
    assert stdout.getvalue() == 'exit value 1\n'


def test_background_job_lifecycle(make_shell):
    shell, stdout, _ = make_shell()
    shell.execute_line("sleep 0.3 &\n")

    started = stdout.getvalue()
    assert started.startswith('background pid is ')
    pid = int(started.split()[-1])
    assert shell.jobs.pids == [pid]

    wait_until_reaped(shell)
    assert f'background pid {pid} is done: exit value 0\n' in stdout.getvalue()


def test_background_notice_before_next_prompt(make_shell):
    shell, stdout, _ = make_shell("sleep 0.1 &\nsleep 0.5\n")
    assert shell.run() == EXIT_OK
    pid = int(stdout.getvalue().split("\n")[0].split()[-1])
    assert stdout.getvalue() == (
        f": background pid is {pid}\n"
        f": background pid {pid} is done: exit value 0\n"
        ": "
    )


def test_foreground_only_mode_runs_background_synchronously(make_shell, tmp_path):
    state = ShellState()
    state.foreground_only.toggle()
    shell, stdout, _ = make_shell(state=state)

    marker = tmp_path / 'done.txt'
    shell.execute_line(f"touch {marker} &\n")

    assert 'background pid' not in stdout.getvalue()
    assert len(shell.jobs) == 0
    assert marker.exists()
    assert state.last_status == TerminationStatus.exited(0)


def test_sigtstp_switches_running_shell_to_foreground_only(make_shell, tmp_path, capfd):
    state = ShellState()
    shell, stdout, _ = make_shell(state=state)
    handler = SignalHandler(state.foreground_only)
    handler.install()
    try:
        os.kill(os.getpid(), signal.SIGTSTP)
        deadline = time.time() + 2
        while not state.foreground_only.active and time.time() < deadline:
            time.sleep(0.01)
        assert state.foreground_only.active

        marker = tmp_path / 'done.txt'
        shell.execute_line(f"touch {marker} &\n")
    finally:
        handler.restore()

    assert 'Entering foreground-only mode' in capfd.readouterr().out
    assert 'background pid' not in stdout.getvalue()
    assert len(shell.jobs) == 0
    assert marker.exists()


def test_leaving_foreground_only_restores_background(make_shell):
    state = ShellState()
    state.foreground_only.toggle()
    state.foreground_only.toggle()
    shell, stdout, _ = make_shell(state=state)
    shell.execute_line("true &\n")
    assert 'background pid is' in stdout.getvalue()
    wait_until_reaped(shell)


def test_cd_home_and_failure(make_shell, tmp_path, monkeypatch):
    home = tmp_path / 'home'
    home.mkdir()
    monkeypatch.setenv('HOME', str(home))
    monkeypatch.chdir(tmp_path)

    shell, stdout, stderr = make_shell()
    shell.execute_line("cd\n")
    assert os.getcwd() == str(home)

    shell.execute_line("cd /nonexistent-path\n")
    assert os.getcwd() == str(home)
    assert 'cd: /nonexistent-path' in stderr.getvalue()

    shell.execute_line("status\n")
    assert stdout.getvalue() == 'exit value 1\n'


def test_comment_and_blank_lines_do_nothing(make_shell):
    state = ShellState(last_status=TerminationStatus.exited(3))
    shell, stdout, stderr = make_shell("# anything at all\n\n   \n", state=state)
    assert shell.run() == EXIT_OK
    assert stdout.getvalue() == ': : : : '
    assert stderr.getvalue() == ''
    assert state.last_status == TerminationStatus.exited(3)


def test_pid_expansion_reaches_the_program(make_shell, tmp_path):
    shell, _, _ = make_shell(state=ShellState(pid=4567))
    out = tmp_path / 'out.$$'
    shell.execute_line(f"echo pid$$$$log > {out}\n")
    assert (tmp_path / 'out.4567').read_text() == 'pid45674567log\n'


def test_redirections_through_the_shell(make_shell, tmp_path):
    src = tmp_path / 'in.txt'
    src.write_text('one\ntwo\n')
    dst = tmp_path / 'count.txt'
    shell, _, _ = make_shell()
    shell.execute_line(f"wc -l < {src} > {dst}\n")
    assert dst.read_text().strip() == '2'


def test_missing_program_does_not_stop_the_shell(make_shell, capfd):
    shell, stdout, _ = make_shell("smallsh-no-such-program-xyz\nstatus\n")
    assert shell.run() == EXIT_OK
    assert 'exit value 1' in stdout.getvalue()
    assert 'command not recognized' in capfd.readouterr().err


def test_background_signal_termination_is_reported(make_shell):
    shell, stdout, _ = make_shell()
    shell.execute_line("sleep 5 &\n")
    pid = shell.jobs.pids[0]
    os.kill(pid, signal.SIGTERM)
    shell.execute_line("exit\n")
    assert f"background pid {pid} is done: terminated by signal 15" in stdout.getvalue()
    assert shell.state.last_status == TerminationStatus.signaled(signal.SIGTERM)


def test_killed_foreground_child_prints_signal(make_shell, tmp_path):
    script = tmp_path / "self_kill.sh"
    script.write_text('kill -TERM $$\n')
    shell, stdout, _ = make_shell()
    shell.execute_line(f"sh {script}\n")
    assert stdout.getvalue() == "terminated by signal 15\n"
    assert shell.state.last_status == TerminationStatus.signaled(signal.SIGTERM)


def test_exit_waits_for_background_jobs(make_shell):
    shell, stdout, _ = make_shell("sleep 0.2 &\nexit\n")
    assert shell.run() == EXIT_OK
    assert len(shell.jobs) == 0
    assert 'is done: exit value 0' in stdout.getvalue()


def test_end_of_input_acts_like_exit(make_shell):
    shell, stdout, _ = make_shell("sleep 0.1 &\n")
    assert shell.run() == EXIT_OK
    assert len(shell.jobs) == 0
    assert 'is done: exit value 0' in stdout.getvalue()


def test_expansion_overflow_is_fatal(make_shell):
    shell, _, stderr = make_shell("echo " + "$$" * 200 + "\nstatus\n", state=ShellState(pid=4567))
    assert shell.run() == EXIT_FAILURE
    assert 'PID expansion' in stderr.getvalue()


def test_fork_failure_is_fatal(make_shell, monkeypatch):
    def broken_fork():
        raise OSError(11, 'Resource temporarily unavailable')
    monkeypatch.setattr(os, 'fork', broken_fork)
    shell, _, stderr = make_shell("true\nstatus\n")
    assert shell.run() == EXIT_FAILURE
    assert 'fork() failure' in stderr.getvalue()


def test_too_long_line_is_rejected_and_loop_continues(make_shell):
    config = ShellConfig(max_line_length=20)
    shell, stdout, stderr = make_shell("echo " + "a" * 50 + "\nstatus\n", config=config)
    assert shell.run() == EXIT_OK
    assert 'too long' in stderr.getvalue()
    assert 'exit value 0' in stdout.getvalue()


def test_too_many_arguments_is_rejected(make_shell):
    config = ShellConfig(max_arguments=2)
    shell, _, stderr = make_shell(config=config)
    assert shell.execute_line("echo a b c\n") is True
    assert 'too many arguments' in stderr.getvalue()


def test_line_without_program_is_ignored(make_shell, tmp_path):
    shell, stdout, stderr = make_shell()
    assert shell.execute_line(f"> {tmp_path / 'x'} &\n") is True
    assert stdout.getvalue() == ''
    assert stderr.getvalue() == ''
    assert len(shell.jobs) == 0
