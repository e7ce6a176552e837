"""
사진 바이트 저장소

키는 "{order_id}/{token}{ext}" 형태이며 저장소 루트 아래의 상대 경로로 사용된다.
"""
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

import structlog

logger = structlog.get_logger()


class BlobStore(ABC):
    """키 기반 바이트 저장소 계약. 실패 시 OSError 계열 예외를 발생시킨다."""

    @abstractmethod
    def put(self, key: str, data: bytes) -> None: ...

    @abstractmethod
    def get(self, key: str) -> bytes: ...

    @abstractmethod
    def delete(self, key: str) -> None: ...


class LocalBlobStore(BlobStore):
    """로컬 디렉터리 저장소"""

    def __init__(self, root: str):
        self.root = Path(root).resolve()

    def _path(self, key: str) -> Path:
        path = (self.root / key).resolve()
        # 루트 밖으로 나가는 키 차단
        if self.root not in path.parents:
            raise ValueError(f"Invalid storage key: {key!r}")
        return path

    def put(self, key: str, data: bytes) -> None:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)

        # 임시 파일에 쓴 뒤 교체: 중간 상태의 파일이 보이지 않는다
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".upload-")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        logger.debug("Blob stored", key=key, size=len(data))

    def get(self, key: str) -> bytes:
        return self._path(key).read_bytes()

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)
        logger.debug("Blob deleted", key=key)
