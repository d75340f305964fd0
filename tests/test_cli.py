"""
CLI 入口测试

被测模块: cli.py

测试类/函数清单:
    TestCLI                              CLI 命令测试
        test_version                     验证 version 命令输出包含版本号
        test_check                       验证 check 命令输出包含依赖库名
        test_help                        验证 --help 列出所有子命令
        test_text2image_help             验证 text2image --help 显示参数
        test_text2image_dry_run          验证 --dry-run 输出请求体且不调用 API
        test_text2image_invalid_config   验证无效配置文件导致非零退出码
        test_no_command                  验证无命令时显示帮助信息
"""

import json
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).parent.parent


def run_cli(*args):
    return subprocess.run(
        [sys.executable, "cli.py", *args],
        capture_output=True,
        text=True,
        encoding="utf-8",
        cwd=ROOT,
    )


class TestCLI:
    """CLI 命令测试"""

    def test_version(self):
        from aisbreaker import __version__

        result = run_cli("version")

        assert result.returncode == 0
        assert f"aisbreaker-stability v{__version__}" in result.stdout

    def test_check(self):
        result = run_cli("check")

        assert result.returncode == 0
        assert "aiohttp" in result.stdout
        assert "pyyaml" in result.stdout
        assert "pydantic" in result.stdout

    def test_help(self):
        result = run_cli("--help")

        assert result.returncode == 0
        assert "text2image" in result.stdout
        assert "version" in result.stdout
        assert "check" in result.stdout

    def test_text2image_help(self):
        result = run_cli("text2image", "--help")

        assert result.returncode == 0
        assert "--width" in result.stdout
        assert "--dry-run" in result.stdout

    def test_text2image_dry_run(self):
        result = run_cli("text2image", "a cat", "--width", "300", "--height", "100", "--weight", "1", "--dry-run")

        assert result.returncode == 0
        body = json.loads(result.stdout[result.stdout.index("{"):])
        assert body == {
            "text_prompts": [{"text": "a cat", "weight": 1}],
            "samples": 1,
            "width": 256,
            "height": 128,
        }

    def test_text2image_invalid_config(self, tmp_path):
        result = run_cli("text2image", "a cat", "-c", str(tmp_path / "missing.yaml"))

        assert result.returncode != 0

    def test_no_command(self):
        result = run_cli()

        assert result.returncode == 0
        assert "usage" in result.stdout.lower()
