import sys

from judgerun.env import NIX_BIN, NIX_STORE_PATH, NSJAIL_CMD
from judgerun.memory import Memory
from judgerun.mstime import MsTime
from judgerun.nsjail import Command, NsJailBuilder


def _has_pair(argv, first, second):
    return any(a == first and b == second for a, b in zip(argv, argv[1:]))


def test_new_defaults():
    argv = NsJailBuilder.new().build().argv()
    assert argv[0] == NSJAIL_CMD
    assert argv[1] == "-Mo"
    assert _has_pair(argv, "--rlimit_as", "9192")
    assert _has_pair(argv, "-R", NIX_STORE_PATH)
    assert _has_pair(argv, "-R", NIX_BIN)
    assert _has_pair(argv, "--log", "nsjail.txt")
    assert argv[-2:] == ["--disable_proc", "--"]


def test_new_with_wraps_command():
    argv = NsJailBuilder.new_with(Command("timer").arg("-q")).build().argv()
    assert argv[:3] == ["timer", "-q", NSJAIL_CMD]


def test_proc_writable_true():
    argv = NsJailBuilder.new().proc_writable(True).build().argv()
    assert argv[-2:] == ["--proc_rw", "--"]
    assert "--disable_proc" not in argv


def test_proc_writable_false():
    argv = NsJailBuilder.new().proc_writable(False).build().argv()
    assert "--proc_rw" not in argv
    assert "--disable_proc" not in argv
    assert argv[-1] == "--"


def test_limits():
    argv = (
        NsJailBuilder.new()
        .time_limit(MsTime.from_ms(1500))
        .memory_limit(Memory.from_megabytes(3))
        .build()
        .argv()
    )
    assert argv[argv.index("--time_limit") + 1] == "2"
    assert argv[argv.index("--cgroup_mem_max") + 1] == "3145728"


def test_env_and_mounts():
    argv = (
        NsJailBuilder.new()
        .env("PATH", "/opt/bin")
        .mount_read_only("/opt")
        .writable()
        .arg("--rlimit_nofile")
        .arg(128)
        .build()
        .argv()
    )
    assert _has_pair(argv, "--env", "PATH=/opt/bin")
    assert _has_pair(argv, "-R", "/opt")
    assert "--rw" in argv
    assert _has_pair(argv, "--rlimit_nofile", "128")


def test_tmpfsmount():
    argv = NsJailBuilder.new().tmpfsmount("/tmp", Memory.from_megabytes(512)).build().argv()
    assert argv[argv.index("-m") + 1] == "none:/tmp:tmpfs:size=536870912"
    assert argv[argv.index("--env") + 1] == "TMPDIR=/tmp"


def test_cwd_sets_chroot_and_directory(tmp_path):
    command = NsJailBuilder.new().cwd(tmp_path).build()
    assert _has_pair(command.argv(), "--chroot", str(tmp_path))
    assert _has_pair(command.argv(), "--env", "HOME=/")
    assert command.cwd == tmp_path


def test_command_run_with_stdin():
    command = Command(sys.executable).arg("-c").arg(
        "import sys; sys.stdout.write(sys.stdin.read().upper())"
    )
    result = command.run(b"abc", True)
    assert result.returncode == 0
    assert result.stdout == b"ABC"


def test_command_run_failure_captures_stderr(tmp_path):
    command = Command(sys.executable, cwd=tmp_path).arg("-c").arg(
        "import sys; sys.stderr.write('bad'); sys.exit(3)"
    )
    result = command.run()
    assert result.returncode == 3
    assert result.stderr == b"bad"