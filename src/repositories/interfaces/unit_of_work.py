from abc import ABC, abstractmethod
from typing import ContextManager

class IUnitOfWork(ABC):
    @abstractmethod
    def atomic(self) -> ContextManager[None]:
        """
        with 블록 안의 모든 쓰기를 하나의 트랜잭션으로 묶습니다.
        블록이 정상 종료되면 커밋하고, 예외가 발생하면 전부 롤백한 뒤 예외를 다시 던집니다.
        """
        pass
