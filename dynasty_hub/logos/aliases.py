# dynasty_hub/logos/aliases.py
from typing import Dict, Tuple

LOGO_URL_TEMPLATE = "https://a.espncdn.com/i/teamlogos/ncaa/500/{espn_id}.png"

# (alias, ESPN team id) pairs. Aliases are lowercase; several aliases may map
# to the same school. Partial (substring) matching walks this tuple front to
# back and the first hit wins, so order is part of the lookup contract.
#
# Nicknames shared by several schools ("tigers", "wildcats", "orange",
# "cardinals") do not belong here; use a school-specific alias.
TEAM_ALIASES: Tuple[Tuple[str, int], ...] = (
    # SEC
    ("alabama", 333),
    ("bama", 333),
    ("georgia", 61),
    ("uga", 61),
    ("lsu", 99),
    ("ole miss", 145),
    ("mississippi", 145),
    ("texas a&m", 245),
    ("texas a&m aggies", 245),
    ("aggies", 245),
    ("tennessee", 2633),
    ("vols", 2633),
    ("florida", 57),
    ("gators", 57),
    ("auburn", 2),
    ("south carolina", 2579),
    ("gamecocks", 2579),
    ("arkansas", 8),
    ("razorbacks", 8),
    ("missouri", 142),
    ("kentucky", 96),
    ("vanderbilt", 238),
    ("commodores", 238),
    ("mississippi state", 344),
    ("miss state", 344),
    ("oklahoma", 201),
    ("sooners", 201),
    ("texas", 251),
    ("longhorns", 251),
    # Big Ten
    ("ohio state", 194),
    ("buckeyes", 194),
    ("michigan", 130),
    ("wolverines", 130),
    ("penn state", 213),
    ("nittany lions", 213),
    ("oregon", 2483),
    ("ducks", 2483),
    ("iowa", 2294),
    ("hawkeyes", 2294),
    ("wisconsin", 275),
    ("badgers", 275),
    ("indiana", 84),
    ("hoosiers", 84),
    ("michigan state", 127),
    ("spartans", 127),
    ("minnesota", 135),
    ("gophers", 135),
    ("nebraska", 158),
    ("cornhuskers", 158),
    ("illinois", 356),
    ("rutgers", 164),
    ("maryland", 120),
    ("terrapins", 120),
    ("northwestern", 77),
    ("purdue", 2509),
    ("ucla", 26),
    ("bruins", 26),
    ("usc", 30),
    ("southern california", 30),
    ("trojans", 30),
    ("washington", 264),
    ("huskies", 264),
    # ACC
    ("clemson", 228),
    ("miami", 2390),
    ("miami (fl)", 2390),
    ("florida state", 52),
    ("seminoles", 52),
    ("north carolina", 153),
    ("tar heels", 153),
    ("nc state", 152),
    ("virginia tech", 259),
    ("hokies", 259),
    ("virginia", 258),
    ("cavaliers", 258),
    ("pittsburgh", 221),
    ("pitt", 221),
    ("duke", 150),
    ("blue devils", 150),
    ("wake forest", 154),
    ("georgia tech", 59),
    ("yellow jackets", 59),
    ("boston college", 103),
    ("syracuse", 183),
    ("louisville", 97),
    ("stanford", 24),
    ("cardinal", 24),
    ("notre dame", 87),
    ("fighting irish", 87),
    ("cal", 25),
    ("california", 25),
    ("smu", 2567),
    ("mustangs", 2567),
    # Big 12
    ("kansas state", 2306),
    ("baylor", 239),
    ("bears", 239),
    ("tcu", 2628),
    ("horned frogs", 2628),
    ("west virginia", 277),
    ("mountaineers", 277),
    ("iowa state", 66),
    ("cyclones", 66),
    ("kansas", 2305),
    ("jayhawks", 2305),
    ("oklahoma state", 197),
    ("cowboys", 197),
    ("texas tech", 2641),
    ("red raiders", 2641),
    ("utah", 254),
    ("utes", 254),
    ("arizona", 12),
    ("arizona state", 9),
    ("sun devils", 9),
    ("colorado", 38),
    ("buffaloes", 38),
    ("cincinnati", 2132),
    ("bearcats", 2132),
    ("byu", 252),
    ("cougars", 252),
    ("ucf", 2116),
    ("knights", 2116),
    ("houston", 248),
    # Group of Five / independents
    ("bowling green", 189),
    ("falcons", 189),
    ("bgsu", 189),
    ("akron", 2006),
    ("zips", 2006),
    ("eastern michigan", 2199),
    ("eagles", 2199),
    ("emu", 2199),
    ("army", 349),
    ("navy", 2426),
    ("air force", 2005),
    ("liberty", 2335),
    ("james madison", 294),
    ("coastal carolina", 324),
    ("appalachian state", 2026),
    ("app state", 2026),
    ("georgia southern", 290),
    ("boise state", 68),
    ("broncos", 68),
    ("fresno state", 278),
    ("san diego state", 21),
    ("sdsu", 21),
    ("tulane", 2655),
    ("green wave", 2655),
    ("memphis", 235),
    ("marshall", 276),
    ("miami (oh)", 193),
    ("western kentucky", 98),
    ("old dominion", 295),
    ("georgia state", 2247),
    ("louisiana", 309),
    ("ragin cajuns", 309),
    ("troy", 2653),
)

# Exact-match lookup, built once. Read-only after import.
ALIAS_TO_ESPN_ID: Dict[str, int] = dict(TEAM_ALIASES)
