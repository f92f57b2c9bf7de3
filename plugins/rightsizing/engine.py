"""
plugins/rightsizing/engine.py - 라이트사이징 엔진

입력 행(관측된 CPU/메모리 사용률)마다 같은 패밀리 안에서 더 저렴한
대체 인스턴스(또는 인스턴스 조합)를 찾아 출력 행으로 변환합니다.

처리 흐름:
    1. 입력 검증 (RightSizingInput.from_row)
    2. 벤더 카탈로그 조회 (CatalogCache, 최초 사용 시 로드)
    3. 요구사항 계산
       - 요구 vCPU = cpu-util × 원본 vCPU ÷ target-cpu-util
       - 목표 RAM = mem-util × 원본 RAM
    4. 조합 탐색 (search.find_optimal_combination)
    5. 조합의 인스턴스마다 출력 행 생성 (복수면 output-id 공유)

사용법:
    from plugins.rightsizing import RightSizingEngine

    engine = RightSizingEngine()
    outputs = engine.execute([
        {
            "cloud-vendor": "aws",
            "cloud-instance-type": "m5.2xlarge",
            "cpu-util": 20,
            "mem-util": 30,
            "location": "us-east-1",
        }
    ])
"""

from __future__ import annotations

import logging
import math
import uuid
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from core.config import Settings
from core.data.catalog import CatalogCache, CloudInstance, InstanceCatalog
from core.exceptions import InputValidationError, InstanceNotFoundError, RightSizingError

from .errors import ErrorCollector
from .search import SearchRequest, find_optimal_combination, fix_float
from .validation import RightSizingInput

logger = logging.getLogger(__name__)

RECOMMENDATION_OPTIMAL = "Size already optimal"

# 출력 사용률 소수점 자리수
OUTPUT_PRECISION = 2


@dataclass
class Placement:
    """결과 조합의 인스턴스 하나"""

    instance: CloudInstance
    cpu_util: float  # 0~1
    mem_util: float  # 0~1
    price: float
    price_difference: float = 0.0  # 원본 대비 절감률 (%), 음수면 증가


@dataclass
class RightSizingResult:
    """calculate_right_sizing 결과

    from_search가 False면 원본 인스턴스를 그대로 유지한 결과입니다
    (패밀리 없음, 조건을 만족하는 조합 없음, 탐색 예산 초과).
    """

    placements: list[Placement] = field(default_factory=list)
    from_search: bool = False
    nodes_visited: int = 0

    @property
    def total_cost(self) -> float:
        return sum(p.price for p in self.placements)

    @property
    def is_multi(self) -> bool:
        return len(self.placements) > 1

    def __iter__(self):
        return iter(self.placements)

    def __len__(self) -> int:
        return len(self.placements)


def format_price_change(price_difference: float) -> str:
    """절감률을 사람이 읽을 수 있는 문자열로 변환 (올림 정수 %)"""
    delta = fix_float(price_difference)
    if delta > 0:
        return f"Price decreased by {math.ceil(delta)}%"
    if delta < 0:
        return f"Price increased by {math.ceil(abs(delta))}%"
    return "Price unchanged (0%)"


class RightSizingEngine:
    """카탈로그 조회, 요구사항 계산, 조합 탐색, 출력 행 생성

    Args:
        cache: 벤더 카탈로그 캐시 (None이면 settings로 새로 생성)
        settings: 런타임 설정 (None이면 cache의 설정 또는 기본값)
    """

    def __init__(
        self,
        cache: CatalogCache | None = None,
        settings: Settings | None = None,
    ):
        if settings is None:
            settings = cache.settings if cache is not None else Settings()
        self.settings = settings
        self.cache = cache if cache is not None else CatalogCache(settings)
        self.errors = ErrorCollector()

    # =========================================================================
    # 계산
    # =========================================================================

    def calculate_right_sizing(
        self,
        catalog: InstanceCatalog,
        instance: CloudInstance | None,
        cpu_util: float,
        target_util: float,
        target_ram: float,
        original_mem_util: float,
        region: str | None,
    ) -> RightSizingResult:
        """최적 대체 조합 계산

        Args:
            catalog: 인스턴스가 속한 벤더 카탈로그
            instance: 원본 인스턴스
            cpu_util: 현재 CPU 사용률 (0~1)
            target_util: 목표 CPU 사용률 (0~1, 0 초과)
            target_ram: 목표 RAM (GB)
            original_mem_util: 현재 메모리 사용률 (0~1)
            region: 가격 조회 리전

        Returns:
            RightSizingResult (조합이 없으면 원본 인스턴스 하나, 절감률 0)
        """
        if instance is None:
            raise InputValidationError("cloud-instance-type", "인스턴스가 지정되지 않았습니다")

        family = catalog.get_family(instance.model)
        if not family:
            return self._unchanged(instance, cpu_util, original_mem_util, region)

        family.sort(key=lambda item: item.ram, reverse=True)

        original_cost = instance.get_price(region)
        request = SearchRequest(
            original_cost=original_cost,
            original_ram=instance.ram,
            required_vcpus=cpu_util * instance.vcpus / target_util,
            target_ram=target_ram,
            region=region,
        )
        best = find_optimal_combination(family, request, max_nodes=self.settings.search_max_nodes)

        if not best.found:
            return self._unchanged(instance, cpu_util, original_mem_util, region, nodes_visited=best.nodes_visited)

        final_total_cost = sum(member.get_price(region) for member in best.members)
        price_difference = original_cost - final_total_cost
        price_difference_percentage = price_difference / original_cost * 100
        logger.debug(
            "Final total cost: %s, Price difference: %s, Price difference percentage: %s",
            final_total_cost,
            price_difference,
            price_difference_percentage,
        )

        placements = [
            Placement(
                instance=member,
                cpu_util=best.cpu_util * target_util,
                mem_util=best.mem_util,
                price=member.get_price(region),
                price_difference=price_difference_percentage,
            )
            for member in best.members
        ]
        return RightSizingResult(placements=placements, from_search=True, nodes_visited=best.nodes_visited)

    @staticmethod
    def _unchanged(
        instance: CloudInstance,
        cpu_util: float,
        mem_util: float,
        region: str | None,
        nodes_visited: int = 0,
    ) -> RightSizingResult:
        placement = Placement(
            instance=instance,
            cpu_util=cpu_util,
            mem_util=mem_util,
            price=instance.get_price(region),
        )
        return RightSizingResult(placements=[placement], from_search=False, nodes_visited=nodes_visited)

    # =========================================================================
    # 입력 행 처리
    # =========================================================================

    def process_input(
        self,
        row: Mapping[str, Any],
        catalog: InstanceCatalog | None = None,
    ) -> list[dict[str, Any]]:
        """입력 행 하나를 출력 행 목록으로 변환

        Args:
            row: 입력 행
            catalog: 사용할 카탈로그 (None이면 cloud-vendor로 캐시에서 조회)

        Returns:
            조합의 인스턴스마다 하나씩 생성된 출력 행 (입력 행은 변경하지 않음)

        Raises:
            InputValidationError: 입력 필드 오류
            InstanceNotFoundError: 카탈로그에 없는 모델
            CatalogLoadError: 벤더 카탈로그 로드 실패
        """
        parsed = RightSizingInput.from_row(row)
        if catalog is None:
            catalog = self.cache.get(parsed.vendor)

        instance = catalog.get_instance(parsed.instance_type)
        if instance is None:
            raise InstanceNotFoundError(model=parsed.instance_type, vendor=parsed.vendor)

        target_ram = parsed.mem_fraction * instance.ram
        result = self.calculate_right_sizing(
            catalog,
            instance,
            parsed.cpu_fraction,
            parsed.target_fraction,
            target_ram,
            parsed.mem_fraction,
            parsed.location,
        )

        # 하나의 인스턴스를 여러 인스턴스로 대체하는 경우 행을 묶는 ID
        output_id = str(uuid.uuid4()) if result.is_multi else None

        outputs: list[dict[str, Any]] = []
        for placement in result:
            model = placement.instance.model
            output = dict(row)
            output["old-instance"] = row["cloud-instance-type"]
            output["old-cpu-util"] = row["cpu-util"]
            output["old-mem-util"] = row["mem-util"]
            output["cloud-instance-type"] = model
            output["cpu-util"] = round(placement.cpu_util * 100, OUTPUT_PRECISION)
            output["mem-util"] = round(placement.mem_util * 100, OUTPUT_PRECISION)
            output["total-memoryGB"] = placement.instance.ram
            if output_id:
                output["output-id"] = output_id
            output["price-change"] = format_price_change(placement.price_difference)
            if result.from_search and not result.is_multi and model == parsed.instance_type:
                output["Recommendation"] = RECOMMENDATION_OPTIMAL
            outputs.append(output)

        return outputs

    def execute(
        self,
        rows: Iterable[Mapping[str, Any]],
        fail_fast: bool = True,
    ) -> list[dict[str, Any]]:
        """모든 입력 행 처리

        Args:
            rows: 입력 행 목록
            fail_fast: False면 실패한 행을 self.errors에 기록하고 건너뜀

        Returns:
            출력 행 목록 (입력 순서 유지)
        """
        outputs: list[dict[str, Any]] = []
        for index, row in enumerate(rows):
            try:
                outputs.extend(self.process_input(row))
            except RightSizingError as e:
                if fail_fast:
                    raise
                self.errors.collect(e, index, row)
        return outputs
