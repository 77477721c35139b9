"""
Static Country Tables for Sovereign State Normalization

Immutable lookup tables used by the sovereignty filter and identity normalizer:
UN member codes, named non-sovereign territories, the sentinel-code repair list,
ISO alpha-2 to continent mapping and English to localized display names.

Tables are bundled into a frozen CountryTables value that is built once and
passed explicitly into the pipeline components.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from functools import lru_cache
from types import MappingProxyType
from typing import Optional

# Natural Earth placeholder for "no ISO 3166 code assigned"
SENTINEL_CODE = "-99"

# 193 UN member states, ISO 3166-1 alpha-2
UN_MEMBER_CODES: frozenset[str] = frozenset({
    'AF', 'AL', 'DZ', 'AD', 'AO', 'AG', 'AR', 'AM', 'AU', 'AT',
    'AZ', 'BS', 'BH', 'BD', 'BB', 'BY', 'BE', 'BZ', 'BJ', 'BT',
    'BO', 'BA', 'BW', 'BR', 'BN', 'BG', 'BF', 'BI', 'CV', 'KH',
    'CM', 'CA', 'CF', 'TD', 'CL', 'CN', 'CO', 'KM', 'CG', 'CD',
    'CR', 'CI', 'HR', 'CU', 'CY', 'CZ', 'DK', 'DJ', 'DM', 'DO',
    'EC', 'EG', 'SV', 'GQ', 'ER', 'EE', 'SZ', 'ET', 'FJ', 'FI',
    'FR', 'GA', 'GM', 'GE', 'DE', 'GH', 'GR', 'GD', 'GT', 'GN',
    'GW', 'GY', 'HT', 'HN', 'HU', 'IS', 'IN', 'ID', 'IR', 'IQ',
    'IE', 'IL', 'IT', 'JM', 'JP', 'JO', 'KZ', 'KE', 'KI', 'KP',
    'KR', 'KW', 'KG', 'LA', 'LV', 'LB', 'LS', 'LR', 'LY', 'LI',
    'LT', 'LU', 'MG', 'MW', 'MY', 'MV', 'ML', 'MT', 'MH', 'MR',
    'MU', 'MX', 'FM', 'MD', 'MC', 'MN', 'ME', 'MA', 'MZ', 'MM',
    'NA', 'NR', 'NP', 'NL', 'NZ', 'NI', 'NE', 'NG', 'MK', 'NO',
    'OM', 'PK', 'PW', 'PA', 'PG', 'PY', 'PE', 'PH', 'PL', 'PT',
    'QA', 'RO', 'RU', 'RW', 'KN', 'LC', 'VC', 'WS', 'SM', 'ST',
    'SA', 'SN', 'RS', 'SC', 'SL', 'SG', 'SK', 'SI', 'SB', 'SO',
    'ZA', 'SS', 'ES', 'LK', 'SD', 'SR', 'SE', 'CH', 'SY', 'TJ',
    'TZ', 'TH', 'TL', 'TG', 'TO', 'TT', 'TN', 'TR', 'TM', 'TV',
    'UG', 'UA', 'AE', 'GB', 'US', 'UY', 'UZ', 'VU', 'VE', 'VN',
    'YE', 'ZM', 'ZW',
})

# Territories that appear in the source with country-like attributes
EXCLUDED_TERRITORIES: frozenset[str] = frozenset({
    'Greenland', 'Puerto Rico', 'French Guiana', 'Guadeloupe',
    'Martinique', 'Réunion', 'Azores', 'Canary Islands', 'Bermuda',
    'Cayman Islands', 'Falkland Islands', 'Kashmir', 'Western Sahara',
    'Hong Kong', 'Macao', 'Svalbard', 'Åland Islands', 'Antarctica',
    'Northern Cyprus', 'American Samoa', 'Guam', 'Northern Mariana Islands',
    'U.S. Virgin Islands', 'British Virgin Islands', 'Anguilla',
    'Montserrat', 'Turks and Caicos Islands', 'Gibraltar', 'Faroe Islands',
    'Isle of Man', 'Channel Islands', 'Christmas Island', 'Cocos Islands',
    'Norfolk Island', 'Tokelau', 'Cook Islands', 'Niue', 'Wallis and Futuna',
    'French Polynesia', 'New Caledonia', 'Aruba', 'Curaçao', 'Sint Maarten',
    'Bonaire', 'Saba', 'Sint Eustatius', 'Saint Martin', 'Saint Barthélemy',
})

# Sovereign states observed with ISO_A2 = -99 upstream. Patch list, not a gazetteer.
SENTINEL_REPAIRS: Mapping[str, str] = MappingProxyType({
    'France': 'FR',
    '法国': 'FR',
    '法兰西': 'FR',
    'Norway': 'NO',
    '挪威': 'NO',
})

CONTINENTS = (
    'Asia', 'Europe', 'Africa', 'North America',
    'South America', 'Oceania', 'Antarctica', 'Unknown',
)


def _group(continent: str, codes: str) -> dict[str, str]:
    return {code: continent for code in codes.split()}


CONTINENT_BY_CODE: Mapping[str, str] = MappingProxyType({
    **_group('Asia', """
        AF AM AZ BH BD BT BN KH CN GE IN ID IR IQ IL JP JO KZ KW KG LA LB
        MY MV MN MM NP KP OM PK PH QA SA SG KR LK SY TW TJ TH TL TR TM AE
        UZ VN YE
    """),
    # Cyprus is grouped with Europe
    **_group('Europe', """
        AL AD AT BY BE BA BG HR CY CZ DK EE FI FR DE GR HU IS IE IT LV LI
        LT LU MT MD MC ME NL MK NO PL PT RO RU SM RS SK SI ES SE CH UA GB
        VA
    """),
    **_group('Africa', """
        DZ AO BJ BW BF BI CV CM CF TD KM CG CD CI DJ EG GQ ER SZ ET GA GM
        GH GN GW KE LS LR LY MG MW ML MR MU MA MZ NA NE NG RW ST SN SC SL
        SO ZA SS SD TZ TG TN UG ZM ZW
    """),
    **_group('North America', """
        AG BS BB BZ CA CR CU DM DO SV GD GT HT HN JM MX NI PA KN LC VC TT
        US
    """),
    **_group('South America', "AR BO BR CL CO EC GY PY PE SR UY VE"),
    **_group('Oceania', "AU FJ KI MH FM NR NZ PW PG WS SB TO TV VU"),
})

# English name -> Chinese display name (display locale "zh")
LOCALIZED_NAMES: Mapping[str, str] = MappingProxyType({
    'Afghanistan': '阿富汗',
    'Albania': '阿尔巴尼亚',
    'Algeria': '阿尔及利亚',
    'Andorra': '安道尔',
    'Angola': '安哥拉',
    'Antigua and Barbuda': '安提瓜和巴布达',
    'Argentina': '阿根廷',
    'Armenia': '亚美尼亚',
    'Australia': '澳大利亚',
    'Austria': '奥地利',
    'Azerbaijan': '阿塞拜疆',
    'Bahamas': '巴哈马',
    'Bahrain': '巴林',
    'Bangladesh': '孟加拉国',
    'Barbados': '巴巴多斯',
    'Belarus': '白俄罗斯',
    'Belgium': '比利时',
    'Belize': '伯利兹',
    'Benin': '贝宁',
    'Bhutan': '不丹',
    'Bolivia': '玻利维亚',
    'Bosnia and Herzegovina': '波斯尼亚和黑塞哥维那',
    'Botswana': '博茨瓦纳',
    'Brazil': '巴西',
    'Brunei': '文莱',
    'Bulgaria': '保加利亚',
    'Burkina Faso': '布基纳法索',
    'Burundi': '布隆迪',
    'Cabo Verde': '佛得角',
    'Cambodia': '柬埔寨',
    'Cameroon': '喀麦隆',
    'Canada': '加拿大',
    'Central African Republic': '中非共和国',
    'Chad': '乍得',
    'Chile': '智利',
    'China': '中国',
    'Colombia': '哥伦比亚',
    'Comoros': '科摩罗',
    'Congo': '刚果',
    'Costa Rica': '哥斯达黎加',
    'Croatia': '克罗地亚',
    'Cuba': '古巴',
    'Cyprus': '塞浦路斯',
    'Czechia': '捷克',
    'Democratic Republic of the Congo': '刚果民主共和国',
    'Denmark': '丹麦',
    'Djibouti': '吉布提',
    'Dominica': '多米尼克',
    'Dominican Republic': '多米尼加共和国',
    'Ecuador': '厄瓜多尔',
    'Egypt': '埃及',
    'El Salvador': '萨尔瓦多',
    'Equatorial Guinea': '赤道几内亚',
    'Eritrea': '厄立特里亚',
    'Estonia': '爱沙尼亚',
    'Eswatini': '斯威士兰',
    'Ethiopia': '埃塞俄比亚',
    'Fiji': '斐济',
    'Finland': '芬兰',
    'France': '法国',
    'Gabon': '加蓬',
    'Gambia': '冈比亚',
    'Georgia': '格鲁吉亚',
    'Germany': '德国',
    'Ghana': '加纳',
    'Greece': '希腊',
    'Grenada': '格林纳达',
    'Guatemala': '危地马拉',
    'Guinea': '几内亚',
    'Guinea-Bissau': '几内亚比绍',
    'Guyana': '圭亚那',
    'Haiti': '海地',
    'Honduras': '洪都拉斯',
    'Hungary': '匈牙利',
    'Iceland': '冰岛',
    'India': '印度',
    'Indonesia': '印度尼西亚',
    'Iran': '伊朗',
    'Iraq': '伊拉克',
    'Ireland': '爱尔兰',
    'Israel': '以色列',
    'Italy': '意大利',
    'Jamaica': '牙买加',
    'Japan': '日本',
    'Jordan': '约旦',
    'Kazakhstan': '哈萨克斯坦',
    'Kenya': '肯尼亚',
    'Kiribati': '基里巴斯',
    'Kuwait': '科威特',
    'Kyrgyzstan': '吉尔吉斯斯坦',
    'Laos': '老挝',
    'Latvia': '拉脱维亚',
    'Lebanon': '黎巴嫩',
    'Lesotho': '莱索托',
    'Liberia': '利比里亚',
    'Libya': '利比亚',
    'Liechtenstein': '列支敦士登',
    'Lithuania': '立陶宛',
    'Luxembourg': '卢森堡',
    'Madagascar': '马达加斯加',
    'Malawi': '马拉维',
    'Malaysia': '马来西亚',
    'Maldives': '马尔代夫',
    'Mali': '马里',
    'Malta': '马耳他',
    'Marshall Islands': '马绍尔群岛',
    'Mauritania': '毛里塔尼亚',
    'Mauritius': '毛里求斯',
    'Mexico': '墨西哥',
    'Micronesia': '密克罗尼西亚',
    'Moldova': '摩尔多瓦',
    'Monaco': '摩纳哥',
    'Mongolia': '蒙古',
    'Montenegro': '黑山',
    'Morocco': '摩洛哥',
    'Mozambique': '莫桑比克',
    'Myanmar': '缅甸',
    'Namibia': '纳米比亚',
    'Nauru': '瑙鲁',
    'Nepal': '尼泊尔',
    'Netherlands': '荷兰',
    'New Zealand': '新西兰',
    'Nicaragua': '尼加拉瓜',
    'Niger': '尼日尔',
    'Nigeria': '尼日利亚',
    'North Korea': '朝鲜',
    'North Macedonia': '北马其顿',
    'Norway': '挪威',
    'Oman': '阿曼',
    'Pakistan': '巴基斯坦',
    'Palau': '帕劳',
    'Palestine': '巴勒斯坦',
    'Panama': '巴拿马',
    'Papua New Guinea': '巴布亚新几内亚',
    'Paraguay': '巴拉圭',
    'Peru': '秘鲁',
    'Philippines': '菲律宾',
    'Poland': '波兰',
    'Portugal': '葡萄牙',
    'Qatar': '卡塔尔',
    'Romania': '罗马尼亚',
    'Russia': '俄罗斯',
    'Rwanda': '卢旺达',
    'Saint Kitts and Nevis': '圣基茨和尼维斯',
    'Saint Lucia': '圣卢西亚',
    'Saint Vincent and the Grenadines': '圣文森特和格林纳丁斯',
    'Samoa': '萨摩亚',
    'San Marino': '圣马力诺',
    'Sao Tome and Principe': '圣多美和普林西比',
    'Saudi Arabia': '沙特阿拉伯',
    'Senegal': '塞内加尔',
    'Serbia': '塞尔维亚',
    'Seychelles': '塞舌尔',
    'Sierra Leone': '塞拉利昂',
    'Singapore': '新加坡',
    'Slovakia': '斯洛伐克',
    'Slovenia': '斯洛文尼亚',
    'Solomon Islands': '所罗门群岛',
    'Somalia': '索马里',
    'South Africa': '南非',
    'South Korea': '韩国',
    'South Sudan': '南苏丹',
    'Spain': '西班牙',
    'Sri Lanka': '斯里兰卡',
    'Sudan': '苏丹',
    'Suriname': '苏里南',
    'Sweden': '瑞典',
    'Switzerland': '瑞士',
    'Syria': '叙利亚',
    'Taiwan': '台湾',
    'Tajikistan': '塔吉克斯坦',
    'Tanzania': '坦桑尼亚',
    'Thailand': '泰国',
    'Timor-Leste': '东帝汶',
    'Togo': '多哥',
    'Tonga': '汤加',
    'Trinidad and Tobago': '特立尼达和多巴哥',
    'Tunisia': '突尼斯',
    'Turkey': '土耳其',
    'Turkmenistan': '土库曼斯坦',
    'Tuvalu': '图瓦卢',
    'Uganda': '乌干达',
    'Ukraine': '乌克兰',
    'United Arab Emirates': '阿拉伯联合酋长国',
    'United Kingdom': '英国',
    'United States': '美国',
    'Uruguay': '乌拉圭',
    'Uzbekistan': '乌兹别克斯坦',
    'Vanuatu': '瓦努阿图',
    'Venezuela': '委内瑞拉',
    'Vietnam': '越南',
    'Yemen': '也门',
    'Zambia': '赞比亚',
    'Zimbabwe': '津巴布韦',
})


@dataclass(frozen=True)
class CountryTables:
    """Immutable bundle of every lookup table the pipeline consults"""
    un_members: frozenset[str] = UN_MEMBER_CODES
    excluded_territories: frozenset[str] = EXCLUDED_TERRITORIES
    sentinel_code: str = SENTINEL_CODE
    sentinel_repairs: Mapping[str, str] = field(default_factory=lambda: SENTINEL_REPAIRS)
    continents: Mapping[str, str] = field(default_factory=lambda: CONTINENT_BY_CODE)
    localized_names: Mapping[str, str] = field(default_factory=lambda: LOCALIZED_NAMES)

    def __post_init__(self):
        """Validate table contents"""
        for code in self.un_members:
            if len(code) != 2 or not code.isalpha():
                raise ValueError(f"UN member code must be 2 letters, got '{code}'")
        for name, code in self.sentinel_repairs.items():
            if len(code) != 2 or not code.isalpha():
                raise ValueError(f"Repair code for '{name}' must be 2 letters, got '{code}'")
        for code, continent in self.continents.items():
            if continent not in CONTINENTS:
                raise ValueError(f"Unknown continent '{continent}' for code '{code}'")

    @classmethod
    def default(cls) -> CountryTables:
        """Shared instance built from the module tables"""
        return _default_tables()

    def is_member(self, code: Optional[str]) -> bool:
        return bool(code) and code in self.un_members

    def is_excluded(self, name: Optional[str]) -> bool:
        return bool(name) and name in self.excluded_territories

    def continent_for(self, code: Optional[str]) -> str:
        if not code:
            return 'Unknown'
        return self.continents.get(code, 'Unknown')

    def repair_code(self, candidates: Iterable[Optional[str]]) -> Optional[str]:
        """Return the patched ISO code for the first exactly-matching name"""
        for name in candidates:
            if name and name in self.sentinel_repairs:
                return self.sentinel_repairs[name]
        return None

    def localized_name(self, english_name: Optional[str]) -> Optional[str]:
        if not english_name:
            return None
        return self.localized_names.get(english_name)

    def extend(
        self,
        un_members: Iterable[str] = (),
        excluded_territories: Iterable[str] = (),
        sentinel_repairs: Optional[Mapping[str, str]] = None,
        continents: Optional[Mapping[str, str]] = None,
        localized_names: Optional[Mapping[str, str]] = None,
    ) -> CountryTables:
        """
        Return a new CountryTables with additional entries merged over this one.

        Args:
            un_members: Extra ISO alpha-2 codes treated as members
            excluded_territories: Extra territory names to exclude
            sentinel_repairs: Extra name -> code repairs
            continents: Code -> continent overrides
            localized_names: English -> display name overrides

        Returns:
            New immutable CountryTables; this instance is unchanged
        """
        return replace(
            self,
            un_members=self.un_members | {c.upper() for c in un_members},
            excluded_territories=self.excluded_territories | frozenset(excluded_territories),
            sentinel_repairs=MappingProxyType({
                **self.sentinel_repairs,
                **{k: v.upper() for k, v in (sentinel_repairs or {}).items()},
            }),
            continents=MappingProxyType({
                **self.continents,
                **{k.upper(): v for k, v in (continents or {}).items()},
            }),
            localized_names=MappingProxyType({**self.localized_names, **(localized_names or {})}),
        )


@lru_cache(maxsize=1)
def _default_tables() -> CountryTables:
    return CountryTables()
