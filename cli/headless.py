"""
cli/headless.py - Headless CLI Runner

CI/CD 파이프라인 및 자동화를 위한 비대화형 실행 모드입니다.
입력 파일의 행마다 라이트사이징을 수행하고 결과를 출력합니다.

Usage:
    # 콘솔 테이블 출력
    rs run inputs.json

    # JSON 파일로 저장
    rs run inputs.csv -f json -o result.json

    # 사용자 정의 카탈로그 + 실패 행 건너뛰기
    rs run inputs.yaml --data-path my-instances.json --keep-going

옵션:
    --data-path: 사용자 정의 카탈로그 디스크립터 (cloud-vendor "custom")
    --config: YAML 설정 파일
    -f, --format: 출력 형식 (기본: console, json, csv, excel)
    -o, --output: 출력 파일 경로 (기본: json은 표준 출력, csv/excel은 자동 생성)
    --target-cpu-util: target-cpu-util이 없는 행에 적용할 기본값
    --keep-going: 실패한 행을 건너뛰고 계속 진행 (종료 코드 2)
    --max-nodes: 행당 탐색 노드 예산 (0 = 무제한)
    -q, --quiet: 최소 출력 모드
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import click
from rich.markup import escape

from cli.ui.console import console, logger, print_error, print_info, print_success, print_warning, render_results
from core.config import load_settings
from core.exceptions import RightSizingError
from plugins.rightsizing import RightSizingEngine
from shared.io import read_rows, write_rows

# 종료 코드
EXIT_OK = 0
EXIT_FAILED = 1
EXIT_PARTIAL = 2
EXIT_INTERRUPTED = 130

_EXTENSIONS = {"json": "json", "csv": "csv", "excel": "xlsx"}


@dataclass
class HeadlessConfig:
    """Headless 실행 설정"""

    # 입력
    input_path: str

    # 카탈로그 / 설정
    data_path: str | None = None
    config_file: str | None = None
    max_nodes: int | None = None

    # 계산
    target_cpu_util: float | None = None
    keep_going: bool = False

    # 출력
    format: str = "console"  # console, json, csv, excel
    output: str | None = None
    quiet: bool = False
    debug: bool = False


class HeadlessRunner:
    """Headless CLI Runner

    대화형 프롬프트 없이 라이트사이징을 실행합니다.
    CI/CD 파이프라인 및 스크립트 자동화에 적합합니다.
    """

    def __init__(self, config: HeadlessConfig):
        self.config = config
        self.engine: RightSizingEngine | None = None
        self.outputs: list[dict[str, Any]] = []

    def run(self) -> int:
        """Headless 실행

        Returns:
            0: 성공
            1: 실패
            2: 일부 행 실패 (--keep-going)
            130: 사용자 중단
        """
        try:
            # 1. 설정 로드
            settings = load_settings(
                self.config.config_file,
                data_path=self.config.data_path,
                search_max_nodes=self.config.max_nodes,
            )
            if not self.config.debug:
                logging.getLogger().setLevel(settings.log_level)

            # 2. 입력 로드
            rows = self._load_rows()

            # 3. 실행
            self.engine = RightSizingEngine(settings=settings)
            self.outputs = self.engine.execute(rows, fail_fast=not self.config.keep_going)

            # 4. 출력
            self._emit()

            # 5. 실패 행 보고
            return self._report_errors()

        except KeyboardInterrupt:
            if not self.config.quiet:
                console.print("\n[dim]취소되었습니다[/dim]")
            return EXIT_INTERRUPTED
        except RightSizingError as e:
            print_error(escape(str(e)))
            if self.config.debug:
                logger.exception("Headless 실행 실패: %s", type(e).__name__)
            return EXIT_FAILED

    @property
    def _json_to_stdout(self) -> bool:
        return self.config.format == "json" and not self.config.output

    @property
    def _verbose(self) -> bool:
        # 표준 출력 JSON에는 상태 메시지를 섞지 않음
        return not self.config.quiet and not self._json_to_stdout

    def _load_rows(self) -> list[dict[str, Any]]:
        """입력 행 로드 및 기본 target-cpu-util 적용"""
        rows = read_rows(self.config.input_path)
        if self._verbose:
            print_info(f"입력: {escape(str(self.config.input_path))} ({len(rows)}행)")

        default_target = self.config.target_cpu_util
        if default_target is None:
            return rows
        return [row if "target-cpu-util" in row else {**row, "target-cpu-util": default_target} for row in rows]

    def _default_output(self) -> str:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return f"rightsizing_{timestamp}.{_EXTENSIONS[self.config.format]}"

    def _emit(self) -> None:
        """형식별 결과 출력"""
        fmt = self.config.format

        if fmt == "console":
            console.print(render_results(self.outputs))
            return

        if self._json_to_stdout:
            click.echo(json.dumps(self.outputs, ensure_ascii=False, indent=2))
            return

        path = write_rows(self.outputs, self.config.output or self._default_output(), fmt=fmt)
        if not self.config.quiet:
            print_success(f"저장 완료: {escape(str(path))} ({len(self.outputs)}행)")

    def _report_errors(self) -> int:
        assert self.engine is not None
        errors = self.engine.errors
        if not errors.has_errors:
            return EXIT_OK

        if self._json_to_stdout:
            click.echo(errors.get_summary(), err=True)
            return EXIT_PARTIAL

        print_warning(errors.get_summary())
        if not self.config.quiet:
            for error in errors.errors:
                console.print(f"  [dim]- {escape(str(error))}[/dim]")
        return EXIT_PARTIAL


def run_headless(
    input_path: str,
    data_path: str | None = None,
    config_file: str | None = None,
    format: str = "console",
    output: str | None = None,
    target_cpu_util: float | None = None,
    keep_going: bool = False,
    max_nodes: int | None = None,
    quiet: bool = False,
    debug: bool = False,
) -> int:
    """Headless 실행 편의 함수

    Args:
        input_path: 입력 파일 (.json / .yaml / .csv)
        data_path: 사용자 정의 카탈로그 디스크립터
        config_file: YAML 설정 파일
        format: 출력 형식
        output: 출력 파일 경로
        target_cpu_util: 기본 목표 CPU 사용률 (%)
        keep_going: 실패한 행 건너뛰기
        max_nodes: 탐색 노드 예산
        quiet: 최소 출력 모드
        debug: 실패 시 traceback 출력

    Returns:
        0: 성공, 1: 실패, 2: 일부 행 실패
    """
    config = HeadlessConfig(
        input_path=input_path,
        data_path=data_path,
        config_file=config_file,
        max_nodes=max_nodes,
        target_cpu_util=target_cpu_util,
        keep_going=keep_going,
        format=format,
        output=output,
        quiet=quiet,
        debug=debug,
    )

    runner = HeadlessRunner(config)
    return runner.run()
