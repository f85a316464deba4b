"""
Language Patterns

Immutable per-language lexicons used by every parsing stage, plus a cached
bundle of compiled regular expressions per language.
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Optional, Pattern, Tuple, Union

from .models import DetectedLanguage


@dataclass(frozen=True)
class IntensityLabels:
    rest: str
    easy: str
    hard: str
    medium: str


@dataclass(frozen=True)
class LanguagePatternSet:
    """Lexicon bundle for one language"""
    language: DetectedLanguage

    # Language detection lexicon
    day_markers: Tuple[str, ...]
    intensity_markers: Tuple[str, ...]
    exercise_markers: Tuple[str, ...]

    # Day segmentation
    day_keywords: Tuple[str, ...]
    day_prefix: str
    training_suffix: str
    weekdays: Tuple[Tuple[str, Tuple[str, ...]], ...]

    # Intensity lexicon, checked rest > easy > hard > medium
    easy_patterns: Tuple[str, ...]
    medium_patterns: Tuple[str, ...]
    hard_patterns: Tuple[str, ...]
    rest_patterns: Tuple[str, ...]
    default_intensity: str
    intensity_labels: IntensityLabels

    # Exercise idioms
    rep_patterns: Tuple[str, ...]
    set_patterns: Tuple[str, ...]
    per_side_patterns: Tuple[str, ...]
    sprint_name: str
    generic_exercise_name: str

    # Nordic secondary detector terms
    nordic_terms: Tuple[str, ...] = ()
    # "(Styrka)"-style training types keyed by intensity level
    training_type_hints: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def all_intensity_patterns(self) -> Tuple[str, ...]:
        return self.rest_patterns + self.easy_patterns + self.hard_patterns + self.medium_patterns


_ENGLISH = LanguagePatternSet(
    language=DetectedLanguage.ENGLISH,
    day_markers=("day", "week", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"),
    intensity_markers=("easy", "medium", "hard", "rest", "light", "moderate", "intense", "heavy", "recovery"),
    exercise_markers=("reps", "sets", "min", "sec", "rest", "workout", "exercise", "training"),
    day_keywords=("training day", "day", "session", "workout"),
    day_prefix="Day",
    training_suffix="Training",
    weekdays=(
        ("Monday", ("monday", "mon")),
        ("Tuesday", ("tuesday", "tues", "tue")),
        ("Wednesday", ("wednesday", "wed")),
        ("Thursday", ("thursday", "thurs", "thu")),
        ("Friday", ("friday", "fri")),
        ("Saturday", ("saturday",)),
        ("Sunday", ("sunday",)),
    ),
    easy_patterns=("easy", "light", "low intensity"),
    medium_patterns=("medium", "moderate", "intermediate"),
    hard_patterns=("hard", "heavy", "intense", "high intensity"),
    rest_patterns=("rest", "recovery", "active recovery"),
    default_intensity="Medium",
    intensity_labels=IntensityLabels(rest="Rest", easy="Easy", hard="Hard", medium="Medium"),
    rep_patterns=("reps", "rep", "repetitions"),
    set_patterns=("sets", "set"),
    per_side_patterns=("per side", "each side", "per leg", "per arm", "each leg", "each arm", "bilateral"),
    sprint_name="Sprint intervals",
    generic_exercise_name="Exercise",
)

_SPANISH = LanguagePatternSet(
    language=DetectedLanguage.SPANISH,
    day_markers=("día", "semana", "lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo"),
    intensity_markers=("fácil", "medio", "difícil", "descanso", "ligero", "moderado", "intenso", "recuperación"),
    exercise_markers=("repeticiones", "series", "min", "seg", "descanso", "entrenamiento", "ejercicio"),
    day_keywords=("día", "dia", "jornada", "sesión", "sesion", "entreno"),
    day_prefix="Día",
    training_suffix="Entrenamiento",
    weekdays=(
        ("Lunes", ("lunes",)),
        ("Martes", ("martes",)),
        ("Miércoles", ("miércoles", "miercoles")),
        ("Jueves", ("jueves",)),
        ("Viernes", ("viernes",)),
        ("Sábado", ("sábado", "sabado")),
        ("Domingo", ("domingo",)),
    ),
    easy_patterns=("fácil", "ligero", "suave", "baja intensidad"),
    medium_patterns=("medio", "moderado", "intermedio"),
    hard_patterns=("difícil", "duro", "intenso", "fuerte", "alta intensidad"),
    rest_patterns=("descanso", "recuperación", "reposo"),
    default_intensity="Medio",
    intensity_labels=IntensityLabels(rest="Descanso", easy="Fácil", hard="Difícil", medium="Medio"),
    rep_patterns=("repeticiones", "reps", "rep"),
    set_patterns=("series", "serie"),
    per_side_patterns=("por lado", "cada lado", "por pierna", "por brazo", "bilateral"),
    sprint_name="Intervalos de sprint",
    generic_exercise_name="Ejercicio",
)

_FRENCH = LanguagePatternSet(
    language=DetectedLanguage.FRENCH,
    day_markers=("jour", "semaine", "lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi", "dimanche"),
    intensity_markers=("facile", "moyen", "difficile", "repos", "léger", "modéré", "intense", "récupération"),
    exercise_markers=("répétitions", "séries", "min", "sec", "repos", "entraînement", "exercice"),
    day_keywords=("journée", "jour", "séance", "session"),
    day_prefix="Jour",
    training_suffix="Entraînement",
    weekdays=(
        ("Lundi", ("lundi",)),
        ("Mardi", ("mardi",)),
        ("Mercredi", ("mercredi",)),
        ("Jeudi", ("jeudi",)),
        ("Vendredi", ("vendredi",)),
        ("Samedi", ("samedi",)),
        ("Dimanche", ("dimanche",)),
    ),
    easy_patterns=("facile", "léger", "souple", "basse intensité"),
    medium_patterns=("moyen", "modéré", "intermédiaire"),
    hard_patterns=("difficile", "dur", "intense", "fort", "haute intensité"),
    rest_patterns=("repos", "récupération"),
    default_intensity="Moyen",
    intensity_labels=IntensityLabels(rest="Repos", easy="Facile", hard="Difficile", medium="Moyen"),
    rep_patterns=("répétitions", "reps", "rep"),
    set_patterns=("séries", "série"),
    per_side_patterns=("par côté", "chaque côté", "par jambe", "par bras", "bilatéral"),
    sprint_name="Intervalles de sprint",
    generic_exercise_name="Exercice",
)

_GERMAN = LanguagePatternSet(
    language=DetectedLanguage.GERMAN,
    day_markers=("tag", "woche", "montag", "dienstag", "mittwoch", "donnerstag", "freitag", "samstag", "sonntag"),
    intensity_markers=("leicht", "mittel", "schwer", "ruhe", "erholung", "intensiv", "moderat"),
    exercise_markers=("wiederholungen", "sätze", "min", "sek", "pause", "training", "übung"),
    day_keywords=("tages", "tag", "training", "einheit"),
    day_prefix="Tag",
    training_suffix="Training",
    weekdays=(
        ("Montag", ("montag",)),
        ("Dienstag", ("dienstag",)),
        ("Mittwoch", ("mittwoch",)),
        ("Donnerstag", ("donnerstag",)),
        ("Freitag", ("freitag",)),
        ("Samstag", ("samstag",)),
        ("Sonntag", ("sonntag",)),
    ),
    easy_patterns=("leicht", "einfach", "locker", "geringe intensität"),
    medium_patterns=("mittel", "moderat", "mittlere intensität"),
    hard_patterns=("schwer", "hart", "intensiv", "hohe intensität"),
    rest_patterns=("ruhe", "pause", "erholung", "regeneration"),
    default_intensity="Mittel",
    intensity_labels=IntensityLabels(rest="Ruhe", easy="Leicht", hard="Schwer", medium="Mittel"),
    rep_patterns=("wiederholungen", "wiederholung", "wdh"),
    set_patterns=("sätze", "satz"),
    per_side_patterns=("pro seite", "jede seite", "pro bein", "pro arm", "beidseitig"),
    sprint_name="Sprintintervalle",
    generic_exercise_name="Übung",
)

_SWEDISH = LanguagePatternSet(
    language=DetectedLanguage.SWEDISH,
    day_markers=("dag", "vecka", "måndag", "tisdag", "onsdag", "torsdag", "fredag", "lördag", "söndag"),
    intensity_markers=("lätt", "medel", "svår", "vila", "återhämtning", "intensiv", "moderat", "tung", "hård"),
    exercise_markers=(
        "repetitioner", "rep", "reps", "set", "min", "sek", "vila", "träning", "övning",
        "uppvärmning", "nedvarvning", "stretching", "styrka", "löpning", "jogging",
        "sprintervaller", "intervaller", "armhävningar", "knäböj", "utfall", "hopprep",
    ),
    day_keywords=("träningsdag", "träningspass", "dag", "pass", "övning", "träning"),
    day_prefix="Dag",
    training_suffix="Träning",
    weekdays=(
        ("Måndag", ("måndag",)),
        ("Tisdag", ("tisdag",)),
        ("Onsdag", ("onsdag",)),
        ("Torsdag", ("torsdag",)),
        ("Fredag", ("fredag",)),
        ("Lördag", ("lördag",)),
        ("Söndag", ("söndag",)),
    ),
    easy_patterns=("lätt", "enkel", "låg intensitet", "lätta"),
    medium_patterns=("medel", "måttlig", "moderat", "mellan"),
    hard_patterns=("svår", "tung", "hård", "intensiv", "hög intensitet", "svåra"),
    rest_patterns=("vila", "återhämtning", "vilodag", "aktiv återhämtning"),
    default_intensity="Medel",
    intensity_labels=IntensityLabels(rest="Vila", easy="Lätt", hard="Svår", medium="Medel"),
    rep_patterns=("repetitioner", "repetition", "upprepningar", "reps", "rep"),
    set_patterns=("set", "omgångar", "omgång", "varv"),
    per_side_patterns=("per sida", "varje sida", "per ben", "per arm", "bilateralt", "på varje sida"),
    sprint_name="Sprintervaller",
    generic_exercise_name="Övning",
    nordic_terms=(
        "uppvärmning", "nedvarvning", "träning", "sprintervaller", "löpning",
        "lätt", "medel", "svår", "vila", "jogging", "stretching", "övning",
        "armhävningar", "knäböj", "utfall", "styrka", "tung", "hård", "lätta",
    ),
    training_type_hints=MappingProxyType({
        "rest": ("vila", "återhämtning"),
        "hard": ("styrka", "intensiv", "hård"),
        "easy": ("lätt", "lågintensiv"),
        "medium": ("kondition", "cardio", "uthållighet"),
    }),
)

_NORWEGIAN = LanguagePatternSet(
    language=DetectedLanguage.NORWEGIAN,
    day_markers=("dag", "uke", "mandag", "tirsdag", "onsdag", "torsdag", "fredag", "lørdag", "søndag"),
    intensity_markers=("lett", "middels", "hard", "hvile", "restitusjon", "intensiv", "moderat"),
    exercise_markers=("repetisjoner", "sett", "min", "sek", "hvile", "trening", "øvelse"),
    day_keywords=("treningsdag", "treningsøkt", "dag", "økt", "øvelse", "trening"),
    day_prefix="Dag",
    training_suffix="Trening",
    weekdays=(
        ("Mandag", ("mandag",)),
        ("Tirsdag", ("tirsdag",)),
        ("Onsdag", ("onsdag",)),
        ("Torsdag", ("torsdag",)),
        ("Fredag", ("fredag",)),
        ("Lørdag", ("lørdag",)),
        ("Søndag", ("søndag",)),
    ),
    easy_patterns=("lett", "enkel", "lav intensitet"),
    medium_patterns=("middels", "moderat"),
    hard_patterns=("hard", "tung", "intensiv", "høy intensitet"),
    rest_patterns=("hvile", "restitusjon", "hviledag"),
    default_intensity="Middels",
    intensity_labels=IntensityLabels(rest="Hvile", easy="Lett", hard="Hard", medium="Middels"),
    rep_patterns=("repetisjoner", "reps", "rep"),
    set_patterns=("sett", "runder"),
    per_side_patterns=("per side", "hver side", "per ben", "per arm", "bilateralt"),
    sprint_name="Sprintintervaller",
    generic_exercise_name="Øvelse",
    nordic_terms=(
        "oppvarming", "nedvarming", "trening", "intervaller", "løping",
        "lett", "middels", "hard", "hvile", "jogging", "tøying", "øvelse",
        "pushups", "knebøy", "utfall", "styrke",
    ),
)

_DANISH = LanguagePatternSet(
    language=DetectedLanguage.DANISH,
    day_markers=("dag", "uge", "mandag", "tirsdag", "onsdag", "torsdag", "fredag", "lørdag", "søndag"),
    intensity_markers=("let", "mellem", "hård", "hvile", "restitution", "intensiv", "moderat"),
    exercise_markers=("gentagelser", "sæt", "min", "sek", "hvile", "træning", "øvelse"),
    day_keywords=("træningsdag", "træningssession", "dag", "session", "øvelse"),
    day_prefix="Dag",
    training_suffix="Træning",
    weekdays=(
        ("Mandag", ("mandag",)),
        ("Tirsdag", ("tirsdag",)),
        ("Onsdag", ("onsdag",)),
        ("Torsdag", ("torsdag",)),
        ("Fredag", ("fredag",)),
        ("Lørdag", ("lørdag",)),
        ("Søndag", ("søndag",)),
    ),
    easy_patterns=("let", "nem", "lav intensitet"),
    medium_patterns=("mellem", "moderat"),
    hard_patterns=("hård", "tung", "intens", "høj intensitet"),
    rest_patterns=("hvile", "restitution", "hviledag"),
    default_intensity="Mellem",
    intensity_labels=IntensityLabels(rest="Hvile", easy="Let", hard="Hård", medium="Mellem"),
    rep_patterns=("gentagelser", "reps", "rep"),
    set_patterns=("sæt", "runder"),
    per_side_patterns=("per side", "hver side", "per ben", "per arm", "bilateralt"),
    sprint_name="Sprintintervaller",
    generic_exercise_name="Øvelse",
    nordic_terms=(
        "opvarmning", "nedkøling", "træning", "intervaller", "løb",
        "let", "mellem", "hård", "hvile", "jogging", "udstrækning", "øvelse",
        "armstrækninger", "knæbøjninger", "udfald", "styrke",
    ),
)

_FINNISH = LanguagePatternSet(
    language=DetectedLanguage.FINNISH,
    day_markers=(
        "päivä", "viikko", "maanantai", "tiistai", "keskiviikko", "torstai",
        "perjantai", "lauantai", "sunnuntai",
    ),
    intensity_markers=("helppo", "keskitaso", "kova", "lepo", "palautuminen", "intensiivinen", "kohtalainen"),
    exercise_markers=("toistot", "sarjat", "min", "sek", "lepo", "harjoitus", "liike"),
    day_keywords=("harjoituspäivä", "päivä", "sessio", "harjoitus"),
    day_prefix="Päivä",
    training_suffix="Harjoitus",
    weekdays=(
        ("Maanantai", ("maanantai",)),
        ("Tiistai", ("tiistai",)),
        ("Keskiviikko", ("keskiviikko",)),
        ("Torstai", ("torstai",)),
        ("Perjantai", ("perjantai",)),
        ("Lauantai", ("lauantai",)),
        ("Sunnuntai", ("sunnuntai",)),
    ),
    easy_patterns=("helppo", "kevyt", "matala intensiteetti"),
    medium_patterns=("keskitaso", "kohtalainen"),
    hard_patterns=("kova", "raskas", "intensiivinen", "korkea intensiteetti"),
    rest_patterns=("lepo", "palautuminen", "lepopäivä"),
    default_intensity="Keskitaso",
    intensity_labels=IntensityLabels(rest="Lepo", easy="Helppo", hard="Kova", medium="Keskitaso"),
    rep_patterns=("toistot", "toisto"),
    set_patterns=("sarjat", "sarja", "kierrokset"),
    per_side_patterns=("per puoli", "joka puoli", "per jalka", "per käsi"),
    sprint_name="Sprintti-intervallit",
    generic_exercise_name="Harjoitus",
    nordic_terms=(
        "lämmittely", "jäähdyttely", "harjoitus", "intervallit", "juoksu",
        "helppo", "keskitaso", "kova", "lepo", "hölkkä", "venyttely", "liike",
        "punnerrukset", "kyykyt", "askelkyykyt", "voima",
    ),
)

PATTERN_SETS: Mapping[DetectedLanguage, LanguagePatternSet] = MappingProxyType({
    p.language: p
    for p in (_ENGLISH, _SPANISH, _FRENCH, _GERMAN, _SWEDISH, _NORWEGIAN, _DANISH, _FINNISH)
})

# Curated lists used before full scoring when the text is diacritic-heavy.
SWEDISH_SPECIFIC_TERMS: Tuple[str, ...] = (
    "uppvärmning", "nedvarvning", "träning", "sprintervaller", "löpning",
    "lätt", "medel", "svår", "vila", "jogging", "stretching", "övning",
    "armhävningar", "knäböj", "utfall",
)

NORDIC_CHARS: Tuple[str, ...] = ("å", "ä", "ö", "ø", "æ", "é", "ü", "ð", "þ")


def resolve_language(language: Union[DetectedLanguage, str, None]) -> DetectedLanguage:
    """Coerce a language id, defaulting to english for unknown values."""
    if isinstance(language, DetectedLanguage):
        return language
    try:
        return DetectedLanguage(str(language).lower())
    except ValueError:
        return DetectedLanguage.ENGLISH


def get_language_patterns(language: Union[DetectedLanguage, str, None]) -> LanguagePatternSet:
    return PATTERN_SETS[resolve_language(language)]


def word_alternation(terms) -> str:
    """Regex alternation of literal terms, longest first so prefixes don't shadow."""
    ordered = sorted(set(terms), key=len, reverse=True)
    return "|".join(re.escape(t) for t in ordered)


def word_regex(terms, flags: int = re.IGNORECASE) -> Pattern[str]:
    return re.compile(rf"\b(?:{word_alternation(terms)})\b", flags)


@dataclass(frozen=True)
class CompiledPatterns:
    """Regexes derived from one LanguagePatternSet"""
    day_regex: Pattern[str]
    set_regexes: Tuple[Pattern[str], ...]
    rep_regexes: Tuple[Pattern[str], ...]
    per_side_regex: Pattern[str]
    weekday_regexes: Tuple[Tuple[str, Pattern[str]], ...]
    day_marker_regexes: Tuple[Pattern[str], ...]
    intensity_marker_regexes: Tuple[Pattern[str], ...]
    exercise_marker_regexes: Tuple[Pattern[str], ...]
    nordic_term_regexes: Tuple[Pattern[str], ...]

    def weekday_for(self, line: str) -> Optional[str]:
        for name, regex in self.weekday_regexes:
            if regex.search(line):
                return name
        return None


@lru_cache(maxsize=None)
def compiled_patterns(language: DetectedLanguage) -> CompiledPatterns:
    """Compile (once) every regex the parsers need for a language."""
    p = get_language_patterns(language)
    keywords = word_alternation(p.day_keywords)
    day_regex = re.compile(
        rf"\b(?:{keywords})\s*(\d+)[:.\s-]+(.*?)(?=\b(?:{keywords})\s*\d+[:.\s-]|\Z)",
        re.IGNORECASE | re.DOTALL,
    )

    def each(terms):
        return tuple(re.compile(rf"\b{re.escape(t)}\b", re.IGNORECASE) for t in terms)

    return CompiledPatterns(
        day_regex=day_regex,
        set_regexes=(re.compile(rf"(\d+)\s*(?:{word_alternation(p.set_patterns)})\b", re.IGNORECASE),),
        rep_regexes=(re.compile(rf"(\d+)\s*(?:{word_alternation(p.rep_patterns)})\b", re.IGNORECASE),),
        per_side_regex=word_regex(p.per_side_patterns),
        weekday_regexes=tuple((name, word_regex(aliases)) for name, aliases in p.weekdays),
        day_marker_regexes=each(p.day_markers),
        intensity_marker_regexes=each(p.intensity_markers),
        exercise_marker_regexes=each(p.exercise_markers),
        nordic_term_regexes=each(p.nordic_terms),
    )
