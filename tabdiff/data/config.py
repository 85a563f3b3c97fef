import pydantic

from tabdiff.data.datasource_config import DatasourceConfig

__all__ = ("Config",)


@pydantic.dataclasses.dataclass(frozen=True, kw_only=True)
class Config:
    max_workers: pydantic.PositiveInt
    datasources: tuple[DatasourceConfig, ...]

    def datasource(self, /, name: str) -> DatasourceConfig | None:
        return next((ds for ds in self.datasources if ds.name == name), None)

    def __repr__(self) -> str:
        return f"Config(max_workers={self.max_workers}, datasources={self.datasources})"
