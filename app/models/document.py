from pydantic import BaseModel
from typing import List, Optional

class MovieDocument(BaseModel):
    id: str
    partitionKey: str
    movieId: str
    type: str = "Movie"
    textSearch: str
    title: str
    year: int
    rating: float
    topRated: bool = False
    genres: List[str] = []
    cast: List[str] = []

class ActorDocument(BaseModel):
    id: str
    partitionKey: str
    actorId: str
    type: str = "Actor"
    name: str
    birthYear: Optional[int] = None
    deathYear: Optional[int] = None
    profession: List[str] = []
    textSearch: str
    movies: List[str] = []
