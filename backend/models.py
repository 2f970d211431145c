# Aggregated model imports (registers every table on SQLModel.metadata)
from domain.models.user import User
from domain.models.genre import Genre
from domain.models.rap import RapEntry, RapLike
