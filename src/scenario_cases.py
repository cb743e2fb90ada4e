import json
from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path

from input_driver import InputMode
from keyword_extractor import first_sinhala_keyword


class Check(Enum):
    PRESENT = "present"    # anchor eventually shows up
    ABSENT = "absent"      # anchor never shows up in the window
    SNAPSHOT = "snapshot"  # one read, non-empty and containing the anchor


@dataclass(frozen=True)
class Suite:
    name: str
    title: str
    mode: InputMode
    check: Check


SUITES = {
    "Pos_Fun": Suite("Pos_Fun", "Positive Functional", InputMode.ATOMIC, Check.PRESENT),
    "Neg_Fun": Suite("Neg_Fun", "Negative Functional", InputMode.ATOMIC, Check.ABSENT),
    "Pos_UI": Suite("Pos_UI", "Positive UI", InputMode.INCREMENTAL, Check.PRESENT),
    "Neg_UI": Suite("Neg_UI", "Negative UI", InputMode.INCREMENTAL, Check.SNAPSHOT),
}


def suite_by_name(name: str) -> Suite:
    try:
        return SUITES[name]
    except KeyError:
        raise ValueError(f"Unknown suite {name!r}") from None


def suite_for_id(case_id: str) -> Suite:
    prefix = case_id.rsplit("_", 1)[0]
    try:
        return SUITES[prefix]
    except KeyError:
        raise ValueError(f"Unknown suite for case id {case_id!r}") from None


@dataclass(frozen=True)
class ScenarioCase:
    id: str
    name: str
    input: str
    expected: str = ""
    forbidden: str = ""
    keyword: str = ""
    suite: str = ""
    anchor: str = field(init=False)

    def __post_init__(self):
        suite = suite_by_name(self.suite) if self.suite else suite_for_id(self.id)
        object.__setattr__(self, "suite", suite.name)
        if self.expected and self.forbidden:
            raise ValueError(f"{self.id}: set expected or forbidden, not both")
        if suite.check is Check.SNAPSHOT:
            anchor = self.keyword
        else:
            anchor = first_sinhala_keyword(self.source_text) or self.keyword
        if not anchor:
            raise ValueError(f"{self.id}: no Sinhala text to derive an anchor from and no fallback keyword")
        object.__setattr__(self, "anchor", anchor)

    @property
    def source_text(self) -> str:
        return self.forbidden if self.suite_def.check is Check.ABSENT else self.expected

    @property
    def suite_def(self) -> Suite:
        return SUITES[self.suite]

    @property
    def title(self) -> str:
        return f"{self.id} - {self.name}" if self.name else self.id

    def to_dict(self) -> dict:
        return asdict(self)


_POS_FUN = [
    ("Pos_Fun_0001", "Convert future tense sentence", "mama heta enavaa", "මම හෙට එනවා", "මම හෙට"),
    ("Pos_Fun_0002", "Convert future tense sentence", "apee ayiyaa heta gedhara enavaa", "අපේ අයියා හෙට ගෙදර එනවා", "අපේ අයියා"),
    ("Pos_Fun_0003", "Convert polite request", "oyaa udheeta kaaladha inne", "ඔයා උදේට කාලද ඉන්නේ", "ඔයා උදේට"),
    ("Pos_Fun_0004", "Convert future tense sentence", "amma gedhara aavaama uyanna help ekak dhenna", "අම්ම ගෙදර ආවාම උයන්න help එකක් දෙන්න", "අම්ම"),
    ("Pos_Fun_0005", "Convert mixed Singlish + English", "machan oyaata mekata hodama visadhuma management ekata email ekak dhaana eka. Ethakota anivaaryen action ekak ganii..", "මචන් ඔයාට මෙකට හොඩම විසදුම management එකට email එකක් දාන එක. එතකොට අනිවාර්යෙන් action එකක් ගනී.", "මචන්"),
    ("Pos_Fun_0006", "Convert mixed Singlish + English", "Machan zoom meeting eka start karaa. Ikmanata join wenna", "මචන් zoom meeting එක start කරා. ඉක්මනට join වෙන්න", "මචන්"),
    ("Pos_Fun_0007", "Convert mixed Singlish + English", "Heta enakota oyaage parana note tika genath dhenna puluvan veyidha? maava asaniipa velaa hitapu nisaa class yanna unee naee. thava sathi dhekakin exam nisaa mama dhavasen photocopy aragena heta havasama dhennam.", "හෙට එනකොට ඔයාගෙ පරන note ටික ගෙනත් දෙන්න පුලුවන් වෙයිද? මාව අසනීප වෙලා හිටපු නිසා class යන්න උනේ නෑ. තව සති දෙකකින් exam නිසා මම දවසෙන් photocopy අරගෙන හෙට හවසම දෙන්නම්.", "හෙට එනකොට"),
    ("Pos_Fun_0008", "Convert polite request", "apee gamee avurudhu uthsavee labana sathiyee thiyennee, oyath enavadha?", "අපේ ගමේ අවුරුදු උත්සවේ ලබන සතියේ තියෙන්නේ, ඔයත් එනවද?", "අපේ ගමේ"),
    ("Pos_Fun_0009", "Convert mixed Singlish + English", "Risk ekak ganne naethuva mee rassaava karanna amaaruyi.", "Risk එකක් ගන්නෙ නැතුව මේ රස්සාව කරන්න අමාරුයි.", "එකක්"),
    ("Pos_Fun_0010", "Convert mixed Singlish + English", "Oyaage facebook name eka mokadhdha?", "ඔයාගෙ facebook name එක මොකද්ද?", "ඔයාගෙ"),
    ("Pos_Fun_0011", "Convert future tense sentence", "Adhanam mata enna vena ekak naee", "අදනම් මට එන්න වෙන එකක් නෑ", "අදනම්"),
    ("Pos_Fun_0012", "Convert polite request", "Anee mata oyaage whats app number eka dhenavadha?", "අනේ මට ඔයාගෙ whats app number එක දෙනවද?", "අනේ මට"),
    ("Pos_Fun_0013", "", "magee yaluvaagee geval thiyenneth hoomaagama", "මගේ යලුවාගේ ගෙවල් තියෙන්නෙත් හෝමාගම", "මගේ යලුවාගේ"),
    ("Pos_Fun_0014", "Convert future tense sentence", "Hetanam kalin ennaveyi. Project ekee vaeda balanna naethnam time eka madhi venavaa", "හෙටනම් කලින් එන්නවෙයි. Project එකේ වැඩ බලන්න නැත්නම් time එක මදි වෙනවා", "හෙටනම්"),
    ("Pos_Fun_0015", "Convert interrogative question", "oyaata kohomadha?", "ඔයාට කොහොමද?", "ඔයාට"),
    ("Pos_Fun_0016", "Convert polite request", "mata udhavvak karanna puluvandha?", "මට උදව්වක් කරන්න පුළුවන්ද?", "මට උදව්වක්"),
    ("Pos_Fun_0017", "Convert present tense action", "mama dhaen vaeda karanavaa", "මම දැන් වැඩ කරනවා", "මම දැන්"),
    ("Pos_Fun_0018", "Convert future tense sentence", "api heta enavaa", "අපි හෙට එනවා", "අපි හෙට"),
    ("Pos_Fun_0019", "Convert negative sentence", "mama ehema karanne naehae", "මම එහෙම කරන්නේ නැහැ", "මම එහෙම"),
    ("Pos_Fun_0020", "Convert imperative command", "vahaama enna", "වහාම එන්න", "වහාම"),
    ("Pos_Fun_0021", "Convert plural pronoun sentence", "api passee kathaa karamu", "අපි පස්සේ කතා කරමු", "අපි පස්සේ"),
    ("Pos_Fun_0022", "Convert mixed Singlish + English", "Zoom meeting ekak thiyenavaa", "Zoom meeting එකක් තියෙනවා", "එකක්"),
    ("Pos_Fun_0023", "Convert common greeting", "dhavasa suba veevaa!!", "දවස සුබ වේවා!!", "දවස සුබ"),
    ("Pos_Fun_0024", "Convert future tense sentence", "api heta maamalaagee gedhara yanavaa", "අපි හෙට මාමලාගේ ගෙදර යනවා", "අපි හෙට"),
]

# Neg_Fun_0001 pairs a currency input with an unrelated interrogative keyword;
# kept verbatim from the authored table.
_NEG_FUN = [
    ("Neg_Fun_0001", "Currency + units mixed", "Rs. 5343 walata kg 2k ganna", "", "කොහොමද"),
    ("Neg_Fun_0002", "Joined + segmented mix", "mata paankannaoonee", "මට පාන් කන්න ඕනේ", "මට පාන්"),
    ("Neg_Fun_0003", "Numbers mixed inside words", "mama 2n gedhara yanavaa", "මම ගෙදර යනවා", "මම ගෙදර"),
    ("Neg_Fun_0004", "Mixed casing (upper/lower)", "MaMa GeDhArA YaNaVaA", "මම ගෙදර යනවා", "මම ගෙදර"),
    ("Neg_Fun_0005", "Random special characters", "mama @gedhara #yanavaa", "මම ගෙදර යනවා", "මම ගෙදර"),
    ("Neg_Fun_0006", "Joined words in a question", "oyaatakohomadha?", "ඔයාට කොහොමද?", "ඔයාට"),
    ("Neg_Fun_0007", "Heavy slang + typos", "ado bn ela wge neda? poddak blpnko", "අඩෝ බන් එල වගෙ නේද? පොඩ්ඩක් බලපන්කො", "අඩෝ බන්"),
    ("Neg_Fun_0008", "Alphanumeric token in the middle", "heta 7.30AM enavaa", "හෙට 7.30AM එනවා", "හෙට එනවා"),
    ("Neg_Fun_0009", "Currency + unit + shorthand", "USD 1500 walata ml 500k ganna", "USD 1500 වලට ml 500ක් ගන්න", "වලට ක්"),
    ("Neg_Fun_0010", "Newlines and spacing stress", "api passee \\n kathaa karamu \\n hari hari", "අපි පස්සේ කතා කරමු හරි හරි", "අපි පස්සේ"),
]

_UI_PREFIX = "Sinhala output should update automatically while typing and display: "

_POS_UI = [
    ("Pos_UI_0001", "Real-time output updates while typing", "mama pansal yanavaa", _UI_PREFIX + "මම පන්සල් යනවා", "මම පන්සල්"),
    ("Pos_UI_0002", "Multiple spaces do not break UI rendering", "mama        pansal yanavaa", _UI_PREFIX + "මම පන්සල් යනවා", "මම පන්සල්"),
    ("Pos_UI_0003", "Medium input does not cause lag/freezing", "api passee kathaa karamu. oyaa kavadhdha enna hithan inne?", _UI_PREFIX + "අපි පස්සේ කතා කරමු. ඔයා කවද්ද එන්න හිතන් ඉන්නේ?", "අපි පස්සේ"),
    ("Pos_UI_0004", "Mixed Singlish + English terms display correctly", "Zoom meeting ekak thiyenavaa. link eka WhatsApp karanna puLuvandha?", "English words like “Zoom/WhatsApp/link” remain readable; output renders cleanly:Zoom meeting එකක් තියෙනවා. link එක WhatsApp කරන්න පුළුවන්ද?", "එකක්"),
    ("Pos_UI_0005", "Clearing input clears output area", "mamapansalyanavaa (type then clear)", "When input is fully cleared, output area becomes empty : මම පන්සල් යනවා", "මම පන්සල්"),
]

_NEG_UI = [
    ("Neg_UI_0001", "Backspace causes temporary mismatch", "oyaata kohomadha?", "ඔයාට"),
    ("Neg_UI_0002", "Output lags during fast typing", "oyaata kohomadha?", "ඔයාට"),
]


def build_cases() -> list[ScenarioCase]:
    cases = []
    for cid, name, text, expected, keyword in _POS_FUN + _POS_UI:
        cases.append(ScenarioCase(id=cid, name=name, input=text, expected=expected, keyword=keyword))
    for cid, name, text, forbidden, keyword in _NEG_FUN:
        cases.append(ScenarioCase(id=cid, name=name, input=text, forbidden=forbidden, keyword=keyword))
    for cid, name, text, keyword in _NEG_UI:
        cases.append(ScenarioCase(id=cid, name=name, input=text, keyword=keyword))
    ensure_unique_ids(cases)
    return sorted(cases, key=lambda c: (list(SUITES).index(c.suite), c.id))


def ensure_unique_ids(cases: list[ScenarioCase]) -> None:
    seen = set()
    for case in cases:
        if case.id in seen:
            raise ValueError(f"Duplicate scenario id: {case.id}")
        seen.add(case.id)


def case_from_dict(raw: dict) -> ScenarioCase:
    return ScenarioCase(
        id=raw["id"],
        name=raw.get("name", ""),
        input=raw["input"],
        expected=raw.get("expected", ""),
        # "shouldNotShow" is the field name used by the authored tables
        forbidden=raw.get("forbidden", raw.get("shouldNotShow", "")),
        keyword=raw.get("keyword", ""),
        suite=raw.get("suite", ""),
    )


def load_cases_file(path: Path) -> list[ScenarioCase]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of scenario objects")
    cases = [case_from_dict(item) for item in data]
    ensure_unique_ids(cases)
    return cases


def select_cases(cases: list[ScenarioCase], suites: list[str] | None = None, ids: list[str] | None = None) -> list[ScenarioCase]:
    selected = cases
    if suites:
        unknown = [s for s in suites if s not in SUITES]
        if unknown:
            raise ValueError(f"Unknown suite(s): {', '.join(unknown)}")
        selected = [c for c in selected if c.suite in suites]
    if ids:
        wanted = set(ids)
        selected = [c for c in selected if c.id in wanted]
    return selected
