from pydantic import BaseModel, Field

class ActorSearchParams(BaseModel):
    q: str = Field(
        default="",
        description="Term matched against the actor name (contains)"
    )

    page_number: int = Field(
        default=1,
        description="Page number (1-based)"
    )

    page_size: int = Field(
        default=0,
        description="Number of results per page, 0 or less means the default"
    )

class MovieSearchParams(ActorSearchParams):
    genre: str = Field(default="", description="Movies of a genre (Action)")
    year: int = Field(default=0, description="Movies released in a year (2005)")
    rating: float = Field(default=0, description="Movies with a rating >= rating (8.5)")
    top_rated: bool = Field(default=False, description="Top rated movies only")
    actor_id: str = Field(default="", description="Movies with this actor in the cast (nm0000704)")
