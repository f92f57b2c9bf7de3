"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.

명령어 구조:
    rs --version                        # 버전 표시
    rs run INPUT [옵션]                 # 입력 파일 라이트사이징
    rs catalog VENDOR                   # 벤더 카탈로그 패밀리 목록
    rs catalog VENDOR --family m5       # 패밀리 인스턴스 목록
    rs catalog VENDOR --model m5.large  # 모델이 속한 패밀리 인스턴스 목록

Usage:
    # 명령줄에서 직접 실행
    $ rs run inputs.json
    $ rs catalog aws

    # 모듈로 실행
    $ python -m cli.app
"""

import logging
import sys
from pathlib import Path

# 프로젝트 루트를 sys.path에 추가 (plugins 모듈 임포트를 위함)
_project_root = Path(__file__).resolve().parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import click  # noqa: E402
from click import Context  # noqa: E402

from core.config import get_version  # noqa: E402
from shared.io import OUTPUT_FORMATS  # noqa: E402

# Keep lightweight, centralized logging config
# WARNING 레벨로 설정하여 INFO 로그가 결과 출력에 섞이지 않도록 함
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

VERSION = get_version()


def _configure_logging(debug: bool) -> None:
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)


@click.group()
@click.version_option(VERSION, prog_name="rs")
@click.option("--debug", is_flag=True, help="디버그 로그 및 실패 시 traceback 출력")
@click.pass_context
def cli(ctx: Context, debug: bool) -> None:
    """RS - Compute Right-Sizing CLI

    \b
    관측된 CPU/메모리 사용률을 기준으로 같은 패밀리 안에서
    더 저렴한 인스턴스(또는 인스턴스 조합)를 추천합니다.
    """
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    _configure_logging(debug)


@cli.command("run")
@click.argument("input_path", type=click.Path(dir_okay=False))
@click.option("--data-path", default=None, help="사용자 정의 카탈로그 디스크립터 (cloud-vendor: custom)")
@click.option("--config", "config_file", default=None, help="YAML 설정 파일")
@click.option(
    "-f",
    "--format",
    type=click.Choice(["console", *OUTPUT_FORMATS]),
    default="console",
    help="출력 형식",
)
@click.option("-o", "--output", default=None, help="출력 파일 경로")
@click.option(
    "--target-cpu-util",
    type=click.FloatRange(min=0, max=100, min_open=True),
    default=None,
    help="target-cpu-util이 없는 행의 목표 CPU 사용률 (%)",
)
@click.option("--keep-going", is_flag=True, help="실패한 행을 건너뛰고 계속 진행")
@click.option("--max-nodes", type=click.IntRange(min=0), default=None, help="행당 탐색 노드 예산 (0 = 무제한)")
@click.option("-q", "--quiet", is_flag=True, help="최소 출력 모드")
@click.option("--debug", "run_debug", is_flag=True, help="디버그 모드")
@click.pass_context
def run_command(
    ctx: Context,
    input_path: str,
    data_path: str | None,
    config_file: str | None,
    format: str,
    output: str | None,
    target_cpu_util: float | None,
    keep_going: bool,
    max_nodes: int | None,
    quiet: bool,
    run_debug: bool,
) -> None:
    """입력 파일의 모든 행 라이트사이징

    \b
    Examples:
        rs run inputs.json                      # 콘솔 테이블
        rs run inputs.csv -f csv -o out.csv     # CSV 저장
        rs run inputs.json -f json              # JSON 표준 출력
        rs run inputs.json --keep-going         # 실패 행 건너뛰기 (종료 코드 2)
    """
    from cli.headless import run_headless

    debug = run_debug or ctx.obj.get("debug", False)
    _configure_logging(debug)

    exit_code = run_headless(
        input_path=input_path,
        data_path=data_path,
        config_file=config_file,
        format=format,
        output=output,
        target_cpu_util=target_cpu_util,
        keep_going=keep_going,
        max_nodes=max_nodes,
        quiet=quiet,
        debug=debug,
    )
    raise SystemExit(exit_code)


@cli.command("catalog")
@click.argument("vendor")
@click.option("--family", default=None, help="패밀리 이름")
@click.option("--model", default=None, help="모델 이름 (해당 모델의 패밀리 표시)")
@click.option("--region", default=None, help="요금을 표시할 리전")
@click.option("--data-path", default=None, help="사용자 정의 카탈로그 디스크립터")
@click.option("--config", "config_file", default=None, help="YAML 설정 파일")
def catalog_command(
    vendor: str,
    family: str | None,
    model: str | None,
    region: str | None,
    data_path: str | None,
    config_file: str | None,
) -> None:
    """벤더 카탈로그 조회

    \b
    Examples:
        rs catalog aws                          # 패밀리 목록
        rs catalog aws --family m5              # m5 인스턴스 목록
        rs catalog azure --model Standard_D2s_v3 --region eastus
    """
    from rich.markup import escape

    from cli.ui.console import console, print_error, render_families, render_family
    from core.config import load_settings
    from core.data.catalog import CatalogCache
    from core.exceptions import RightSizingError

    try:
        cache = CatalogCache(load_settings(config_file, data_path=data_path))
        catalog = cache.get(vendor)
    except RightSizingError as e:
        print_error(escape(str(e)))
        raise SystemExit(1) from e

    if model:
        family = catalog.get_family_name(model)
        if family is None:
            print_error(f"모델을 찾을 수 없습니다: {escape(model)}")
            raise SystemExit(1)

    if family:
        instances = catalog.families.get(family)
        if instances is None:
            print_error(f"패밀리를 찾을 수 없습니다: {escape(family)}")
            raise SystemExit(1)
        console.print(render_family(family, instances, region=region))
        return

    console.print(render_families(catalog.families, vendor))


if __name__ == "__main__":
    cli()
