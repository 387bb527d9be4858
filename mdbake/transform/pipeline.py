"""TransformPipeline runs ordered text transforms on markdown source before rendering."""

from abc import ABC, abstractmethod


class Transform(ABC):
    @abstractmethod
    def apply(self, content: str) -> str:
        """Transform raw markdown content."""
        ...


class TransformPipeline:
    def __init__(self, transforms: list[Transform]):
        self.transforms = transforms

    def apply(self, content: str) -> str:
        for t in self.transforms:
            content = t.apply(content)
        return content
