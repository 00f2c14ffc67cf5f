from pydantic import BaseModel


class Topic(BaseModel):
    name: str
    completed: bool = False


class Unit(BaseModel):
    label: str  # "Unit 3: Graph Theory [8 Hours]"
    identifier: str
    title: str
    hours: int
    topics: list[Topic]


class SyllabusExtractResponse(BaseModel):
    syllabus: list[Unit]


class ChecklistProgressRequest(BaseModel):
    syllabus: list[Unit]


class ChecklistProgress(BaseModel):
    completed_topics: int
    total_topics: int
    percent_complete: float
