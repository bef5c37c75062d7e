"""
Shared heuristic rule tables.
Every analyzer and the search index compiler read their vocabulary from here,
so a theme detected during analysis is the same theme tagged in the index.
Bump RULES_VERSION whenever a table changes meaning.
"""

import re  # compiled pattern families
from typing import Dict, List, Pattern

RULES_VERSION = '1.0.0'


def _rx(pattern: str) -> Pattern:
	return re.compile(pattern, re.I)


# ---------------------------------------------------------------------------
# Structured content rules
# ---------------------------------------------------------------------------

# Per-genre weight used by genre_match strength
GENRE_WEIGHTS: Dict[str, float] = {
	'Action': 0.85,
	'Comedy': 0.80,
	'Drama': 0.75,
	'Horror': 0.90,
	'Romance': 0.85,
	'Science Fiction': 0.80,
	'Fantasy': 0.80,
	'Thriller': 0.85,
	'Animation': 0.75,
	'Documentary': 0.70,
}
DEFAULT_GENRE_WEIGHT = 0.7

# Genres specific enough that sharing one raises match confidence
DISTINCTIVE_GENRES = frozenset({'Horror', 'Romance', 'Documentary', 'Animation'})

# Studio importance tiers (substring match on company name)
MAJOR_STUDIOS = (
	'Marvel Studios', 'Walt Disney Pictures', 'Warner Bros.', 'Universal Pictures',
	'Paramount Pictures', 'Sony Pictures',
)
PRESTIGE_STUDIOS = ('A24', 'Focus Features', 'Searchlight Pictures', 'Neon')

# Crew job -> importance when the person is shared between two titles
CREW_JOB_IMPORTANCE: Dict[str, float] = {
	'Director': 0.95,
	'Producer': 0.85,
	'Executive Producer': 0.8,
	'Writer': 0.8,
	'Screenplay': 0.8,
	'Cinematographer': 0.7,
	'Editor': 0.7,
	'Composer': 0.65,
}
DEFAULT_CREW_IMPORTANCE = 0.6

# Jobs counted as "key roles" for talent overlap
KEY_CREW_JOBS = frozenset({'Director', 'Producer', 'Executive Producer', 'Writer', 'Screenplay'})

# Billing order cut-offs -> cast importance
CAST_ORDER_IMPORTANCE = ((3, 0.9), (5, 0.8), (10, 0.7))
DEFAULT_CAST_IMPORTANCE = 0.5

# TMDB genre ids (movie and tv)
GENRE_ID_NAMES: Dict[int, str] = {
	28: 'Action', 12: 'Adventure', 16: 'Animation', 35: 'Comedy', 80: 'Crime',
	99: 'Documentary', 18: 'Drama', 10751: 'Family', 14: 'Fantasy', 36: 'History',
	27: 'Horror', 10402: 'Music', 9648: 'Mystery', 10749: 'Romance',
	878: 'Science Fiction', 10770: 'TV Movie', 53: 'Thriller', 10752: 'War', 37: 'Western',
	10759: 'Action & Adventure', 10762: 'Kids', 10763: 'News', 10764: 'Reality',
	10765: 'Sci-Fi & Fantasy', 10766: 'Soap', 10767: 'Talk', 10768: 'War & Politics',
}

# ---------------------------------------------------------------------------
# Semantic pattern families
# ---------------------------------------------------------------------------

THEME_PATTERNS: Dict[str, Pattern] = {
	'family': _rx(r'(family|children|kids|parent|father|mother|son|daughter|sibling|relatives)'),
	'romance': _rx(r'(love|romance|relationship|marriage|wedding|date|romantic|passion|affair)'),
	'action': _rx(r'(action|fight|battle|war|explosion|chase|violence|combat|martial arts)'),
	'mystery': _rx(r'(mystery|detective|investigation|crime|murder|police|clues|solve|puzzle)'),
	'supernatural': _rx(r'(magic|supernatural|fantasy|ghost|vampire|wizard|witch|spell|mystical)'),
	'comedy': _rx(r'(comedy|funny|humor|laugh|joke|comic|hilarious|amusing|witty)'),
	'drama': _rx(r'(drama|emotional|tragedy|life|death|struggle|serious|heartbreak)'),
	'scifi': _rx(r'(future|space|technology|robot|alien|science|fiction|cyberpunk|dystopian)'),
	'horror': _rx(r'(horror|scary|fear|terror|nightmare|monster|demon|evil|haunted)'),
	'historical': _rx(r'(history|historical|period|past|ancient|medieval|victorian|vintage)'),
	'biography': _rx(r'(biography|biopic|real|true|based|story|life|memoir|documentary)'),
	'musical': _rx(r'(music|musical|song|dance|band|concert|performance|singing)'),
	'sports': _rx(r'(sport|game|competition|team|athlete|championship|olympics|tournament)'),
	'adventure': _rx(r'(adventure|journey|quest|explore|travel|discover|expedition|treasure)'),
	'western': _rx(r'(western|cowboy|frontier|ranch|sheriff|outlaw|saloon|horse)'),
	'coming_of_age': _rx(r'(growing up|teenager|adolescent|youth|teen|high school|college)'),
	'revenge': _rx(r'(revenge|vengeance|payback|retribution|justice|betrayal)'),
	'survival': _rx(r'(survival|survive|stranded|wilderness|disaster|apocalypse|rescue)'),
	'friendship': _rx(r'(friendship|friends|buddy|companion|loyalty|bond|brotherhood)'),
	'redemption': _rx(r'(redemption|second chance|forgiveness|reform|salvation|recovery)'),
}

SETTING_PATTERNS: Dict[str, Pattern] = {
	'urban': _rx(r'(city|urban|street|downtown|metropolitan|skyscraper|neighborhood)'),
	'rural': _rx(r'(rural|country|farm|village|small.town|countryside|provincial)'),
	'school': _rx(r'(school|college|university|student|education|classroom|campus)'),
	'workplace': _rx(r'(office|work|job|business|corporate|company|career|profession)'),
	'hospital': _rx(r'(hospital|medical|doctor|nurse|patient|clinic|surgery)'),
	'military': _rx(r'(military|army|soldier|war|combat|veteran|base|battlefield)'),
	'prison': _rx(r'(prison|jail|convict|criminal|inmate|correctional|penitentiary)'),
	'high_society': _rx(r'(wealthy|rich|elite|luxury|mansion|society|aristocrat|privilege)'),
	'underground': _rx(r'(underground|secret|hidden|criminal|mafia|gang|illegal)'),
	'small_town': _rx(r'(small.town|village|rural|community|local|provincial|intimate)'),
	'futuristic': _rx(r'(futuristic|future|advanced|technological|space|cyberpunk)'),
	'historical': _rx(r'(historical|period|past|vintage|classic|traditional|ancient)'),
}

MOOD_PATTERNS: Dict[str, Pattern] = {
	'dark': _rx(r'(dark|gritty|noir|bleak|grim|sinister|ominous|foreboding)'),
	'light': _rx(r'(light|bright|cheerful|optimistic|uplifting|positive|joyful)'),
	'intense': _rx(r'(intense|gripping|thrilling|suspenseful|edge.of.seat|nail.biting)'),
	'emotional': _rx(r'(emotional|touching|heartfelt|moving|tear.jerker|poignant)'),
	'humorous': _rx(r'(humorous|funny|witty|satirical|comedic|amusing|entertaining)'),
	'thought_provoking': _rx(r'(thought.provoking|philosophical|deep|meaningful|profound)'),
	'escapist': _rx(r'(escapist|fantasy|magical|whimsical|imaginative|fantastical)'),
	'realistic': _rx(r'(realistic|authentic|genuine|true.to.life|documentary.style)'),
}

AUDIENCE_PATTERNS: Dict[str, Pattern] = {
	'family_friendly': _rx(r'(family.friendly|all.ages|wholesome|clean|appropriate)'),
	'mature': _rx(r'(mature|adult|sophisticated|complex|nuanced|intellectual)'),
	'teen': _rx(r'(teen|teenage|adolescent|young.adult|youth|high.school)'),
	'male_oriented': _rx(r'(action.packed|testosterone|masculine|guy.movie|bros)'),
	'female_oriented': _rx(r'(romance|emotional|relationship|chick.flick|feminine)'),
	'art_house': _rx(r'(art.house|independent|indie|experimental|avant.garde|festival)'),
	'mainstream': _rx(r'(mainstream|popular|blockbuster|commercial|mass.appeal)'),
	'niche': _rx(r'(niche|specialized|cult|underground|alternative|unique)'),
}

# Axis name -> pattern family, in extraction order
SEMANTIC_AXES: Dict[str, Dict[str, Pattern]] = {
	'themes': THEME_PATTERNS,
	'settings': SETTING_PATTERNS,
	'moods': MOOD_PATTERNS,
	'audience': AUDIENCE_PATTERNS,
}

# Structured genre -> implied semantic keywords
GENRE_SEMANTICS: Dict[str, Dict[str, List[str]]] = {
	'Action': {'themes': ['action'], 'moods': ['intense'], 'audience': ['male_oriented']},
	'Adventure': {'themes': ['adventure'], 'moods': ['escapist'], 'audience': ['family_friendly']},
	'Animation': {'themes': ['family'], 'moods': ['light'], 'audience': ['family_friendly']},
	'Comedy': {'themes': ['comedy'], 'moods': ['humorous', 'light'], 'audience': ['mainstream']},
	'Crime': {'themes': ['mystery'], 'settings': ['urban'], 'moods': ['dark']},
	'Documentary': {'themes': ['biography'], 'moods': ['realistic'], 'audience': ['mature']},
	'Drama': {'themes': ['drama'], 'moods': ['emotional'], 'audience': ['mature']},
	'Family': {'themes': ['family'], 'audience': ['family_friendly'], 'moods': ['light']},
	'Fantasy': {'themes': ['supernatural'], 'moods': ['escapist'], 'audience': ['mainstream']},
	'History': {'themes': ['historical'], 'settings': ['historical'], 'audience': ['mature']},
	'Horror': {'themes': ['horror'], 'moods': ['dark'], 'audience': ['mature']},
	'Music': {'themes': ['musical'], 'moods': ['light'], 'audience': ['mainstream']},
	'Mystery': {'themes': ['mystery'], 'moods': ['intense'], 'audience': ['mature']},
	'Romance': {'themes': ['romance'], 'moods': ['emotional'], 'audience': ['female_oriented']},
	'Science Fiction': {'themes': ['scifi'], 'settings': ['futuristic'], 'moods': ['thought_provoking']},
	'Thriller': {'themes': ['mystery'], 'moods': ['intense'], 'audience': ['mature']},
	'War': {'themes': ['action'], 'settings': ['military'], 'moods': ['dark']},
	'Western': {'themes': ['western'], 'settings': ['rural'], 'moods': ['dark']},
}

# Title regex -> implied (axis, keyword) pairs
TITLE_HEURISTICS = (
	(_rx(r'\b(the|a|an)\s+\w+\s+(saga|chronicles|trilogy|series|collection)\b'), (('themes', 'adventure'),)),
	(_rx(r'\b(part|chapter|episode|volume|book)\s+\d+|\d+\s*$'), (('audience', 'mainstream'),)),
	(_rx(r'(reboot|remake|reimagining|retelling|origins?)'), (('audience', 'mainstream'),)),
	(_rx(r'(dark|black|shadow|night|blood|death|dead|kill|murder)'), (('moods', 'dark'),)),
	(_rx(r'(love|happy|joy|light|bright|hope|dream|wish|magic)'), (('moods', 'light'),)),
	(_rx(r'(family|kids|children|baby|home|mom|dad|parent)'), (('themes', 'family'), ('audience', 'family_friendly'))),
)

# Themes that carry a similarity boost / confidence boost
STRONG_THEMES = frozenset({'horror', 'romance', 'comedy', 'musical', 'western'})
CONFIDENT_THEMES = frozenset({'horror', 'romance', 'comedy', 'musical', 'documentary'})

# ---------------------------------------------------------------------------
# Cultural rules
# ---------------------------------------------------------------------------

# marker -> (pattern, weight, confidence)
CULTURAL_MARKERS = {
	'oscar_worthy': (_rx(r'(oscar|academy.award|prestigious|acclaimed|masterpiece|critically.acclaimed)'), 0.9, 0.85),
	'cult_classic': (_rx(r'(cult|underground|alternative|indie|quirky|unique|offbeat)'), 0.8, 0.75),
	'blockbuster': (_rx(r'(blockbuster|massive|biggest|record.breaking|phenomenon|box.office)'), 0.85, 0.8),
	'controversial': (_rx(r'(controversial|banned|censored|provocative|shocking|scandal)'), 0.8, 0.9),
	'innovative': (_rx(r'(innovative|groundbreaking|revolutionary|first|pioneering|breakthrough)'), 0.9, 0.8),
	'nostalgic': (_rx(r'(classic|nostalgic|timeless|beloved|iconic|legendary)'), 0.7, 0.7),
	'international': (_rx(r'(international|foreign|subtitled|world.cinema|global)'), 0.7, 0.8),
	'based_on': (_rx(r'(based.on|adapted|true.story|novel|book|real|memoir)'), 0.6, 0.9),
}

AWARD_PATTERN = _rx(r'(award|winner|nominated|festival|cannes|oscar|emmy|golden.globe)')

SIGNIFICANT_TERMS = (
	'academy award', 'oscar', 'cannes', 'festival', 'groundbreaking',
	'revolutionary', 'controversial', 'banned', 'cult', 'masterpiece',
	'influential', 'landmark', 'historic', 'breakthrough', 'phenomenon',
)

# theme -> (pattern, categories, relevance)
SOCIAL_THEMES = {
	'social_justice': (_rx(r'(equality|discrimination|prejudice|civil.rights|justice|activism|protest)'), ('politics', 'society'), 0.9),
	'environmentalism': (_rx(r'(environment|climate|pollution|nature|green|ecology|conservation)'), ('environment', 'society'), 0.85),
	'technology_impact': (_rx(r'(artificial.intelligence|digital|cyber|virtual|robot|automation|future)'), ('technology', 'society'), 0.8),
	'globalization': (_rx(r'(global|international|multicultural|diversity|immigration|border)'), ('politics', 'society'), 0.75),
	'generational_conflict': (_rx(r'(generation|millennial|boomer|gen.z|youth|aging|old.vs.new)'), ('society', 'family'), 0.7),
	'economic_inequality': (_rx(r'(economic|capitalism|poverty|wealth|class|money|rich|poor)'), ('economics', 'society'), 0.8),
	'political_power': (_rx(r'(political|government|democracy|power|corruption|election|authority)'), ('politics',), 0.85),
	'religious_spiritual': (_rx(r'(religious|faith|spiritual|god|church|belief|divine|sacred)'), ('religion', 'spirituality'), 0.7),
	'gender_roles': (_rx(r'(gender|feminism|masculinity|equality|sexism|patriarchy|empowerment)'), ('society', 'politics'), 0.85),
	'mental_health': (_rx(r'(mental.health|depression|anxiety|therapy|trauma|healing|wellness)'), ('health', 'society'), 0.8),
}

# movement -> (indicator substrings, {anchor year: relevance}, strength)
CULTURAL_MOVEMENTS = {
	'feminist_cinema': (("female director", "female protagonist", "gender equality", "women's rights"), {1970: 0.8, 1990: 0.9, 2010: 1.0}, 0.85),
	'black_cinema': (('african american', 'black experience', 'racial', 'civil rights'), {1970: 0.9, 1990: 0.95, 2010: 0.9}, 0.9),
	'queer_cinema': (('lgbtq', 'gay', 'lesbian', 'transgender', 'queer', 'pride'), {1980: 0.7, 2000: 0.85, 2010: 0.95}, 0.8),
	'environmental_awareness': (('climate change', 'environmental', 'nature', 'conservation'), {1990: 0.7, 2000: 0.8, 2010: 0.95}, 0.75),
	'digital_age': (('internet', 'social media', 'digital', 'virtual', 'online'), {1990: 0.5, 2000: 0.8, 2010: 1.0}, 0.8),
	'post_9_11': (('terrorism', 'security', 'surveillance', 'paranoia', 'fear'), {2001: 1.0, 2010: 0.8, 2020: 0.6}, 0.85),
}

# region culture -> (country codes, influence); first match wins
REGIONAL_CULTURES = {
	'hollywood_mainstream': (('US',), 1.0),
	'european_arthouse': (('FR', 'DE', 'IT', 'GB'), 0.8),
	'asian_cinema': (('JP', 'KR', 'CN', 'IN'), 0.75),
	'latin_american': (('MX', 'BR', 'AR'), 0.6),
}
OTHER_REGIONAL_INFLUENCE = 0.5

# segment -> (indicator substrings, appeal)
AUDIENCE_SEGMENTS = {
	'mass_market': (('mainstream', 'popular', 'commercial'), 0.9),
	'art_house': (('artistic', 'experimental', 'intellectual'), 0.7),
	'genre_fans': (('horror', 'sci-fi', 'fantasy', 'action'), 0.8),
	'family_audience': (('family', 'children', 'wholesome'), 0.85),
	'mature_audience': (('adult', 'sophisticated', 'complex'), 0.75),
	'niche_market': (('cult', 'specialized', 'alternative'), 0.6),
}

RELATED_SEGMENTS = {
	'art_house': ('mature_audience', 'niche_market'),
	'mass_market': ('family_audience', 'genre_fans'),
	'family_audience': ('mass_market',),
	'mature_audience': ('art_house',),
}

# ---------------------------------------------------------------------------
# Index vocabulary
# ---------------------------------------------------------------------------

COMPANY_SUFFIXES = ('pictures', 'studios', 'entertainment', 'productions', 'films', 'media', 'inc.', 'llc', 'ltd.')

STOP_WORDS = frozenset({
	'the', 'a', 'an', 'and', 'or', 'but', 'in', 'on', 'at', 'to', 'for', 'of', 'with', 'by',
	'is', 'are', 'was', 'were', 'be', 'been', 'have', 'has', 'had', 'do', 'does', 'did',
	'will', 'would', 'could', 'should', 'may', 'might', 'must', 'can', 'this', 'that',
	'these', 'those', 'he', 'she', 'it', 'they', 'we', 'you', 'i', 'me', 'him', 'her', 'us', 'them',
})

COUNTRY_NAMES = {
	'US': 'United States', 'GB': 'United Kingdom', 'FR': 'France', 'DE': 'Germany',
	'JP': 'Japan', 'KR': 'South Korea', 'CN': 'China', 'IN': 'India',
	'CA': 'Canada', 'AU': 'Australia',
}

# company-name keyword -> studio family category (first match wins)
STUDIO_FAMILIES = (
	('marvel', 'studio_marvel'),
	('disney', 'studio_disney'),
	('pixar', 'studio_pixar'),
	('warner', 'studio_warner'),
	('universal', 'studio_universal'),
	('paramount', 'studio_paramount'),
	('sony', 'studio_sony'),
	('netflix', 'studio_netflix'),
	('amazon', 'studio_amazon'),
	('hbo', 'studio_hbo'),
	('a24', 'studio_a24'),
	('blumhouse', 'studio_blumhouse'),
	('hallmark', 'studio_hallmark'),
	('lionsgate', 'studio_lionsgate'),
	('fox', 'studio_fox'),
)

# Release year lower bound -> era tag (checked top to bottom)
ERAS = ((2020, 'recent'), (2010, 'modern'), (2000, 'millennium'), (1990, 'nineties'), (1980, 'eighties'))
OLDEST_ERA = 'classic'

SEASONAL_PATTERNS: Dict[str, Pattern] = {
	'christmas': _rx(r'(christmas|holiday|santa|winter|festive)'),
	'halloween': _rx(r'(halloween|scary|horror|october|spooky)'),
	'summer': _rx(r'(summer|beach|vacation|hot|sunny)'),
	'valentines': _rx(r'(valentine|love|romantic|february|romance)'),
}

# Hand-curated search intents: base term -> related terms
INTENT_MAP: Dict[str, List[str]] = {
	# studio universes
	'marvel': ['marvel studios', 'marvel entertainment', 'mcu', 'superhero', 'comic book', 'avengers', 'spider-man', 'x-men'],
	'disney': ['walt disney', 'pixar', 'disney animation', 'family friendly', 'animated', 'princess', 'fairy tale'],
	'netflix': ['netflix original', 'streaming', 'binge-worthy', 'series', 'limited series', 'netflix exclusive'],
	'warner': ['warner bros', 'dc comics', 'batman', 'superman', 'harry potter', 'lord of the rings'],
	'universal': ['universal pictures', 'illumination', 'fast and furious', 'jurassic', 'minions'],
	# genres
	'horror': ['scary', 'thriller', 'supernatural', 'slasher', 'psychological', 'ghost', 'monster', 'zombie'],
	'comedy': ['funny', 'humor', 'laughs', 'romantic comedy', 'parody', 'satire', 'slapstick'],
	'action': ['adventure', 'thriller', 'chase', 'fight', 'explosive', 'martial arts', 'spy'],
	'drama': ['emotional', 'character study', 'serious', 'tear-jerker', 'biographical', 'historical'],
	'scifi': ['science fiction', 'futuristic', 'space', 'alien', 'technology', 'dystopian', 'cyberpunk'],
	# themes
	'christmas': ['holiday', 'winter', 'santa', 'family gathering', 'festive', 'seasonal', 'heartwarming'],
	'romance': ['love story', 'romantic', 'relationship', 'dating', 'wedding', 'couples', 'valentine'],
	'family': ['kids', 'children', 'parenting', 'wholesome', 'all ages', 'educational', 'disney'],
	'true story': ['based on', 'biographical', 'real events', 'documentary', 'historical', 'biopic'],
	# cultural
	'independent': ['indie', 'art house', 'film festival', 'low budget', 'alternative', 'experimental'],
	'foreign': ['international', 'subtitled', 'world cinema', 'non-english', 'cultural'],
	'classic': ['vintage', 'old hollywood', 'golden age', 'timeless', 'iconic', 'legendary'],
	# franchises
	'batman': ['dark knight', 'gotham', 'bruce wayne', 'dc comics', 'superhero', 'vigilante'],
	'star wars': ['jedi', 'sith', 'force', 'galactic', 'lucas', 'space opera', 'rebellion'],
	'james bond': ['007', 'spy', 'secret agent', 'british', 'action', 'espionage'],
	# filmmaker styles
	'tarantino': ['pulp fiction', 'kill bill', 'django', 'violent', 'nonlinear', 'dialogue-heavy'],
	'spielberg': ['adventure', 'family friendly', 'historical', 'emotional', 'blockbuster'],
	'nolan': ['complex', 'mind-bending', 'non-linear', 'dark', 'psychological', 'inception'],
	# decades
	'80s': ['eighties', 'retro', 'neon', 'synth', 'nostalgic', 'classic', 'vintage'],
	'90s': ['nineties', 'grunge', 'alternative', 'teen', 'generation x', 'millennium'],
	'2000s': ['millennium', 'early 2000s', 'y2k', 'digital age', 'post-9/11'],
}

# ---------------------------------------------------------------------------
# Collection and company profiles
# ---------------------------------------------------------------------------

# Franchise type -> collection-name keywords (first match wins)
FRANCHISE_TYPES = (
	('superhero', ('batman', 'superman', 'spider-man', 'x-men', 'avengers', 'marvel', 'dc')),
	('sci_fi', ('star wars', 'star trek', 'alien', 'predator', 'terminator', 'transformers')),
	('action', ('james bond', 'fast and furious', 'mission impossible', 'rambo', 'rocky')),
	('fantasy', ('lord of the rings', 'hobbit', 'harry potter', 'chronicles of narnia')),
	('horror', ('halloween', 'friday the 13th', 'nightmare on elm street', 'saw', 'scream')),
	('comedy', ('american pie', 'meet the parents', 'rush hour', 'hangover', 'anchorman')),
	('animation', ('toy story', 'shrek', 'madagascar', 'ice age', 'despicable me')),
	('adventure', ('indiana jones', 'pirates of the caribbean', 'jurassic park')),
)
DEFAULT_FRANCHISE_TYPE = 'general'

ROMAN_NUMERALS = {'ii': 2, 'iii': 3, 'iv': 4, 'v': 5, 'vi': 6, 'vii': 7, 'viii': 8, 'ix': 9, 'x': 10}

# Studio category -> company-name keywords (first match wins)
STUDIO_CATEGORIES = (
	('major_studio', ('disney', 'warner', 'universal', 'paramount', 'sony', 'fox', 'columbia')),
	('streaming', ('netflix', 'amazon', 'hbo', 'hulu', 'apple', 'peacock')),
	('independent', ('a24', 'neon', 'focus features', 'searchlight', 'annapurna')),
	('animation', ('pixar', 'dreamworks', 'illumination', 'ghibli', 'laika')),
	('horror', ('blumhouse', 'new line', 'dimension')),
	('family', ('hallmark', 'nickelodeon', 'cartoon network')),
	('documentary', ('national geographic', 'discovery', 'hbo documentary')),
	('international', ('studio ghibli', 'gaumont', 'pathé', 'toho')),
)
# Description keyword -> category when the name matches nothing
STUDIO_DESCRIPTION_CATEGORIES = (
	('animation', 'animation'),
	('documentary', 'documentary'),
	('television', 'television'),
	('streaming', 'streaming'),
	('independent', 'independent'),
)
DEFAULT_STUDIO_CATEGORY = 'production'

ROMAN_NUMERAL_RE = re.compile(r'\b(ii|iii|iv|v|vi|vii|viii|ix|x)\b', re.IGNORECASE)
ARABIC_NUMBER_RE = re.compile(r'\b(\d+)\b')
WORD_NUMBER_RE = re.compile(r'\b(part|chapter|episode|volume)\s*\d+', re.IGNORECASE)
