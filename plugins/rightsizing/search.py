"""
plugins/rightsizing/search.py - 동일 패밀리 인스턴스 조합 탐색

원본 인스턴스를 대체할 수 있는 인스턴스 조합(단일 또는 복수)을 같은 패밀리
안에서 찾습니다. 깊이 우선 부분집합 열거 + 용량 가지치기 방식입니다.

탐색 순서:
    visit(index):
        index가 패밀리 끝이면 종료
        현재 RAM + family[index].RAM > 원본 RAM 이면 visit(index + 1)
        family[index]를 포함하고 요구사항 충족 시 최적해와 비교
        visit(index)          # 같은 인스턴스를 다시 포함할 수 있음
        family[index]를 제외하고 visit(index + 1)

    재귀 대신 명시적 스택으로 같은 순서를 그대로 재현합니다.
    같은 순위의 후보는 먼저 발견된 쪽이 유지되므로 순서가 결과에 영향을 줍니다.

순위 (오름차순, 사전식, 각 값은 소수점 5자리로 반올림):
    1. 요구 vCPU 대비 초과 vCPU
    2. 총 RAM
    3. 총 비용
    4. 인스턴스 수
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from core.data.catalog import CloudInstance

logger = logging.getLogger(__name__)

# 부동소수점 비교 정밀도 (소수점 자리수)
COMPARE_PRECISION = 5

_VISIT = 0
_BACKTRACK = 1


def fix_float(value: float, digits: int = COMPARE_PRECISION) -> float:
    """누적 오차를 흡수하기 위해 고정 자리수로 반올림"""
    if math.isinf(value):
        return value
    return round(value, digits)


def rank_key(excess_vcpus: float, ram: float, cost: float, count: int) -> tuple[float, float, float, int]:
    """조합 비교 키 (작을수록 우수)"""
    return (fix_float(excess_vcpus), fix_float(ram), fix_float(cost), count)


@dataclass(frozen=True)
class SearchRequest:
    """탐색 요구사항 (입력 행마다 생성)"""

    original_cost: float
    original_ram: float
    required_vcpus: float
    target_ram: float
    region: str | None = None


@dataclass
class SearchState:
    """탐색 중 현재 부분 조합과 누적 합계"""

    combination: list[CloudInstance] = field(default_factory=list)
    vcpus: float = 0.0
    ram: float = 0.0
    cost: float = 0.0
    _history: list[tuple[float, float, float]] = field(default_factory=list, repr=False)

    def include(self, instance: CloudInstance, region: str | None) -> None:
        self._history.append((self.vcpus, self.ram, self.cost))
        self.combination.append(instance)
        self.vcpus += instance.vcpus
        self.ram += instance.ram
        self.cost += instance.get_price(region)

    def exclude(self) -> None:
        # 뺄셈 대신 이전 합계를 복원하여 오차 누적 방지
        self.combination.pop()
        self.vcpus, self.ram, self.cost = self._history.pop()


@dataclass
class BestSolution:
    """지금까지 발견한 최적 조합"""

    members: list[CloudInstance] = field(default_factory=list)
    excess_vcpus: float = math.inf
    ram: float = math.inf
    cost: float = math.inf
    cpu_util: float = 0.0  # 요구 vCPU / 조합 vCPU
    mem_util: float = 0.0  # 목표 RAM / 조합 RAM
    nodes_visited: int = 0
    exhausted: bool = False

    @property
    def found(self) -> bool:
        return bool(self.members) and not self.exhausted

    def rank(self) -> tuple[float, float, float, int]:
        return rank_key(self.excess_vcpus, self.ram, self.cost, len(self.members))


def _is_feasible(state: SearchState, request: SearchRequest) -> bool:
    return fix_float(state.ram) >= fix_float(request.target_ram) and fix_float(state.vcpus) >= fix_float(
        request.required_vcpus
    )


def _consider(best: BestSolution, state: SearchState, request: SearchRequest) -> None:
    excess = state.vcpus - request.required_vcpus
    candidate = rank_key(excess, state.ram, state.cost, len(state.combination))
    if candidate >= best.rank():
        return

    best.members = list(state.combination)
    best.excess_vcpus, best.ram, best.cost = candidate[0], candidate[1], candidate[2]
    # 사용률은 조합 전체에 균등 분배
    best.cpu_util = request.required_vcpus / state.vcpus
    best.mem_util = request.target_ram / state.ram


def find_optimal_combination(
    family: Sequence[CloudInstance],
    request: SearchRequest,
    max_nodes: int = 0,
) -> BestSolution:
    """요구사항을 만족하는 최소 비용 조합 탐색

    Args:
        family: RAM 내림차순으로 정렬된 패밀리 인스턴스 목록
        request: 탐색 요구사항
        max_nodes: 방문 노드 예산 (0 = 무제한). 초과 시 exhausted=True

    Returns:
        BestSolution (found가 False면 호출자가 원본 인스턴스로 대체)
    """
    best = BestSolution()
    state = SearchState()
    size = len(family)
    stack: list[tuple[int, int]] = [(_VISIT, 0)]

    while stack:
        op, index = stack.pop()

        if op == _BACKTRACK:
            state.exclude()
            stack.append((_VISIT, index + 1))
            continue

        if index >= size:
            continue

        best.nodes_visited += 1
        if max_nodes and best.nodes_visited > max_nodes:
            best.exhausted = True
            logger.warning("조합 탐색 예산 초과 (max_nodes=%d), 원본 인스턴스 유지", max_nodes)
            break

        instance = family[index]

        # 용량 가드: 원본 RAM을 넘는 조합은 만들지 않음
        if fix_float(state.ram + instance.ram) > fix_float(request.original_ram):
            stack.append((_VISIT, index + 1))
            continue

        state.include(instance, request.region)
        if _is_feasible(state, request):
            _consider(best, state, request)

        stack.append((_BACKTRACK, index))
        stack.append((_VISIT, index))

    return best
