"""공유 유틸리티 - plugins와 cli에서 공통 사용.

- io: 입출력 유틸리티 (입력 행 로드, JSON/CSV/Excel 출력)

의존성 구조:
    core (인프라, 카탈로그)
       ↑
    shared (공유 유틸리티)
       ↑
    plugins / cli
"""

from . import io

__all__ = ["io"]
