from __future__ import annotations

import random
from typing import Dict, List, Sequence

DEFAULT_LANGUAGE = "en"
UNKNOWN_PLAYER = "Unknown Player"

# ---------------------------------
# Texter per språk: nyckel -> varianter med {namngivna} parametrar
# ---------------------------------

ENGLISH: Dict[str, List[str]] = {
    "goal": [
        "GOAL! {scorer} finds the back of the net!",
        "What a finish by {scorer}! Top corner!",
        "{scorer} slots it home calmly.",
        "It's in! {scorer} gives them the lead.",
    ],
    "goal_assist": ["Great ball from {assist}."],
    "goal_dribble": [
        "GOAL! {scorer} with a brilliant finish! {assist} with an incredible dribble and assist!"
    ],
    "save": [
        "Brilliant save by {keeper} to deny {shooter}!",
        "{shooter} shoots but {keeper} is equal to it.",
        "Fingertip save! {keeper} tips it over.",
        "{keeper} gathers the loose ball easily.",
    ],
    "save_no_keeper": [
        "{shooter} shoots but the effort is blocked on the line!",
        "{shooter} forces a scramble in the box, but it is cleared.",
    ],
    "miss": [
        "{shooter} fires wide from distance!",
        "Chance! {shooter} heads it over the bar.",
        "{shooter} scuffs the shot, easy for the keeper.",
        "So close! {shooter} curls it inches past the post.",
    ],
    "yellow": ["{player} receives a yellow card for {team}."],
    "red": ["RED CARD! {player} is sent off for {team}!"],
    "corner": ["Corner kick won by {team}."],
    "corner_header": ["GOAL! {scorer} with a brilliant header from the corner!"],
    "corner_bicycle": ["GOAL! What an incredible bicycle kick by {scorer}! Absolutely stunning!"],
    "corner_cleared": ["The defense clears the danger. {defender} gets there first!"],
    "corner_claimed": ["The goalkeeper comes out and claims it! {keeper} with a confident catch."],
    "foul": ["Foul committed by {player}."],
    "post": ["{shooter} hits the woodwork! So unlucky!"],
    "substitution": ["Substitution for {team}. {player} is coming off."],
    "var_check": ["VAR Check in progress..."],
    "var_penalty": ["VAR confirms the penalty! {player} was fouled in the box."],
    "penalty_scored": ["GOAL! {scorer} converts the penalty!"],
    "penalty_saved": ["Incredible save! {keeper} denies the penalty!"],
    "penalty_saved_no_keeper": ["The penalty is kept out! {scorer} cannot believe it."],
    "var_offside": ["VAR confirms: OFFSIDE! The goal is disallowed."],
    "var_foul": ["VAR confirms the foul by {player}. Free kick awarded."],
    "var_clear": ["VAR Check complete: No infringement. Play continues."],
    # Livefeed
    "kickoff": ["Kick-off: {home} vs {away}"],
    "halftime": ["Half-time"],
    "fulltime": ["Full-time: {home} {home_score}-{away_score} {away}"],
}

TURKISH: Dict[str, List[str]] = {
    "goal": [
        "GOL! {scorer} ağları buldu!",
        "{scorer}'dan ne bitiriş! Üst köşe!",
        "{scorer} sakin bir şekilde ağlara gönderdi.",
        "İçerde! {scorer} takımını öne geçirdi.",
    ],
    "goal_assist": ["{assist}'dan harika pas."],
    "goal_dribble": [
        "GOL! {scorer}'dan harika bir bitiriş! {assist}'dan inanılmaz bir dripling ve asist!"
    ],
    "save": [
        "{keeper}, {shooter}'ı engellemek için harika bir kurtarış yaptı!",
        "{shooter} şut çekti ama {keeper} buna eşit!",
        "Parmak ucu kurtarış! {keeper} topu üstten çıkardı.",
        "{keeper} topu rahatça topladı.",
    ],
    "save_no_keeper": [
        "{shooter} şut çekti ama top çizgiden çıkarıldı!",
        "{shooter} ceza sahasında karambol yarattı ama savunma uzaklaştırdı.",
    ],
    "miss": [
        "{shooter} uzaktan genişe attı!",
        "Fırsat! {shooter} üstten auta gönderdi.",
        "{shooter} şutu kötü vurdu, kaleci için kolay.",
        "Çok yakın! {shooter} direğin yanından geçirdi.",
    ],
    "yellow": ["{player}, {team} için sarı kart gördü."],
    "red": ["KIRMIZI KART! {player}, {team} için oyundan atıldı!"],
    "corner": ["{team} korner kazandı."],
    "corner_header": ["GOL! {scorer}'dan kornerden harika bir kafa vuruşu!"],
    "corner_bicycle": ["GOL! {scorer}'dan inanılmaz bir bisiklet vuruşu! Kesinlikle muhteşem!"],
    "corner_cleared": ["Savunma tehlikeyi temizledi. {defender} önce oraya ulaştı!"],
    "corner_claimed": ["Kaleci çıktı ve topu aldı! {keeper} güvenli bir şekilde yakaladı."],
    "foul": ["{player} faul yaptı."],
    "post": ["{shooter} direğe vurdu! Çok şanssız!"],
    "substitution": ["{team} için oyuncu değişikliği. {player} çıkıyor."],
    "var_check": ["VAR kontrolü devam ediyor..."],
    "var_penalty": ["VAR penaltıyı onayladı! {player} ceza sahasında faul yedi."],
    "penalty_scored": ["GOL! {scorer} penaltıyı gole çevirdi!"],
    "penalty_saved": ["İnanılmaz kurtarış! {keeper} penaltıyı engelledi!"],
    "penalty_saved_no_keeper": ["Penaltı gol olmadı! {scorer} inanamıyor."],
    "var_offside": ["VAR onayladı: OFSAYT! Gol iptal edildi."],
    "var_foul": ["VAR, {player}'ın faulünü onayladı. Serbest vuruş verildi."],
    "var_clear": ["VAR kontrolü tamamlandı: İhlal yok. Oyun devam ediyor."],
    "kickoff": ["Başlama vuruşu: {home} - {away}"],
    "halftime": ["İlk yarı sona erdi"],
    "fulltime": ["Maç sonu: {home} {home_score}-{away_score} {away}"],
}

TEMPLATES: Dict[str, Dict[str, List[str]]] = {
    "en": ENGLISH,
    "tr": TURKISH,
}


def register_language(language: str, templates: Dict[str, List[str]]) -> None:
    """Lägg till (eller ersätt) ett språk. Saknade nycklar faller tillbaka på engelska."""
    TEMPLATES[language.lower()] = dict(templates)


def supported_languages() -> Sequence[str]:
    return sorted(TEMPLATES)


class Commentary:
    """Slår upp texter per händelsenyckel för valt språk."""

    def __init__(self, language: str | None = DEFAULT_LANGUAGE) -> None:
        key = (language or DEFAULT_LANGUAGE).lower()
        self.language = key if key in TEMPLATES else DEFAULT_LANGUAGE
        self._table = TEMPLATES[self.language]

    def variants(self, key: str) -> List[str]:
        found = self._table.get(key)
        if found:
            return found
        return TEMPLATES[DEFAULT_LANGUAGE][key]

    def line(self, key: str, rng: random.Random, **params: object) -> str:
        options = self.variants(key)
        # Ett slumpdrag även för en enda variant håller slumpföljden lika mellan språk
        template = options[rng.randrange(len(options))]
        return template.format(**params)

    def fixed(self, key: str, **params: object) -> str:
        """Första varianten, utan slump (rubriker i livefeeden)."""
        return self.variants(key)[0].format(**params)
