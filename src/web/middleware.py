"""Flask 요청 제한 미들웨어

발주 권고/시뮬레이션/엑셀 내보내기는 요청마다 6개 입력을 모두 조회하므로
클라이언트 IP별 요청 수를 슬라이딩 윈도우로 제한한다.
"""
import math
import threading
import time
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from flask import jsonify, request

# 엔드포인트별 윈도우당 허용 요청 수
ORDERING_ENDPOINT_LIMITS = {
    "/api/ordering/recommendation": 20,
    "/api/ordering/simulate": 10,
    "/api/ordering/export": 5,
}


class RateLimiter:
    """인메모리 슬라이딩 윈도우 Rate Limiter

    키는 (IP, 경로)이며, 윈도우가 지난 기록만 남은 키는 정리한다.
    exempt_hosts(기본 localhost)는 제한하지 않는다.
    """

    def __init__(
        self,
        default_limit: int = 60,
        window_seconds: int = 60,
        endpoint_limits: Optional[Mapping[str, int]] = None,
        exempt_hosts: Iterable[str] = ("127.0.0.1",),
        clock: Callable[[], float] = time.monotonic,
    ):
        self.default_limit = default_limit
        self.window_seconds = window_seconds
        self.endpoint_limits = dict(ORDERING_ENDPOINT_LIMITS if endpoint_limits is None else endpoint_limits)
        self.exempt_hosts = frozenset(exempt_hosts)
        self._clock = clock
        self._hits: Dict[tuple, List[float]] = {}
        self._lock = threading.Lock()

    def limit_for(self, path: str) -> int:
        return self.endpoint_limits.get(path, self.default_limit)

    def tracked_keys(self) -> int:
        with self._lock:
            return len(self._hits)

    def _prune(self, cutoff: float) -> None:
        """만료 기록 제거, 빈 키 삭제 (lock 보유 상태에서 호출)"""
        for key in list(self._hits):
            recent = [t for t in self._hits[key] if t > cutoff]
            if recent:
                self._hits[key] = recent
            else:
                del self._hits[key]

    def hit(self, client: str, path: str) -> Optional[float]:
        """요청 1건 기록. 허용이면 None, 초과면 재시도까지 남은 초"""
        if client in self.exempt_hosts:
            return None

        now = self._clock()
        limit = self.limit_for(path)
        with self._lock:
            self._prune(now - self.window_seconds)
            hits = self._hits.setdefault((client, path), [])
            if len(hits) >= limit:
                return max(0.0, hits[0] + self.window_seconds - now)
            hits.append(now)
        return None

    def check(self):
        """before_request 훅: 초과 시 429 응답, 정상이면 None"""
        retry_after = self.hit(request.remote_addr or "", request.path)
        if retry_after is None:
            return None

        response = jsonify({
            "success": False,
            "error": "요청 빈도 제한 초과",
            "code": "RATE_LIMITED",
        })
        response.status_code = 429
        response.headers["Retry-After"] = str(max(1, math.ceil(retry_after)))
        return response
