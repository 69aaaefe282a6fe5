from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# N: noun, V: verb, P: preposition/particle, ADJ: adjective, PRON: pronoun
PartOfSpeech = Literal["N", "V", "P", "ADJ", "PRON", "OTHER"]


class Morphology(BaseModel):
    model_config = ConfigDict(frozen=True)

    stem: Optional[str] = None
    gloss: Optional[str] = None
    features: Dict[str, str] = Field(default_factory=dict)


class Token(BaseModel):
    """One morphologically analysed word occurrence. Never mutated after loading."""

    model_config = ConfigDict(frozen=True)

    id: str
    sura: int = Field(ge=1)
    ayah: int = Field(ge=1)
    position: int = Field(ge=1)
    text: str
    root: str = ""  # empty when the word has no root (particles, pronouns)
    lemma: str = ""
    pos: PartOfSpeech = "N"
    morphology: Morphology = Field(default_factory=Morphology)

    @field_validator("root", "lemma", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return value or ""

    @property
    def ayah_id(self) -> str:
        return f"{self.sura}:{self.ayah}"

    @property
    def address(self) -> str:
        return f"{self.sura}:{self.ayah}:{self.position}"


class RootFlow(BaseModel):
    root: str
    lemma: str
    count: int
    token_ids: List[str] = Field(default_factory=list)


class LoadingProgress(BaseModel):
    current_sura: int
    total_suras: int
    message: str


class CorpusStats(BaseModel):
    total_tokens: int
    total_ayahs: int
    total_surahs: int
    unique_roots: int
    unique_lemmas: int
