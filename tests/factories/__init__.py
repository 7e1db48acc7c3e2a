from .uow import FakePictureRepository, FakeUserRepository, StubUnitOfWork, unique_violation

__all__ = ["FakePictureRepository", "FakeUserRepository", "StubUnitOfWork", "unique_violation"]
