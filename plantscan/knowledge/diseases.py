# =============================================================================
# PlantScan Backend
# knowledge/diseases.py - Disease Reference Data
#
# Static disease records covering every disease referenced by the default
# label map. Treatments and prevention practices shared between diseases are
# defined once and reused.
# =============================================================================

from plantscan.knowledge.records import DiseaseRecord, Treatment, Prevention


# =============================================================================
# Shared Treatments
# =============================================================================

COPPER_FUNGICIDE = Treatment(
    id='copper_fungicide',
    name='Copper Fungicide',
    description='Apply a copper-based fungicide to protect healthy foliage',
    method='chemical',
    application='Spray on all leaf surfaces until runoff',
    frequency='Every 7-10 days',
    duration='2-3 weeks',
    precautions=('Wear protective equipment', 'Avoid overuse', 'Do not spray in full sun'),
    effectiveness=85
)

PROTECTANT_FUNGICIDE = Treatment(
    id='protectant_fungicide',
    name='Protectant Fungicide',
    description='Apply chlorothalonil or mancozeb before infection spreads',
    method='chemical',
    application='Spray foliage, covering lower leaves first',
    frequency='Every 7-14 days',
    duration='Through the wet season',
    precautions=('Observe pre-harvest interval', 'Wear gloves and mask'),
    effectiveness=80
)

SYSTEMIC_FUNGICIDE = Treatment(
    id='systemic_fungicide',
    name='Systemic Fungicide',
    description='Apply a strobilurin or triazole fungicide at first symptoms',
    method='chemical',
    application='Foliar spray',
    frequency='Every 14 days',
    duration='2-4 applications',
    precautions=('Rotate fungicide groups to avoid resistance', 'Wear protective equipment'),
    effectiveness=88
)

SULFUR_SPRAY = Treatment(
    id='sulfur_spray',
    name='Sulfur Spray',
    description='Wettable sulfur suppresses powdery mildew growth',
    method='organic',
    application='Spray upper and lower leaf surfaces',
    frequency='Every 7 days',
    duration='3-4 weeks',
    precautions=('Do not apply above 32°C', 'Do not mix with oil sprays'),
    effectiveness=75
)

NEEM_OIL = Treatment(
    id='neem_oil',
    name='Neem Oil',
    description='Cold-pressed neem oil acts as a mild fungicide and insect repellent',
    method='organic',
    application='Spray in the evening on all foliage',
    frequency='Every 5-7 days',
    duration='3 weeks',
    precautions=('Test on a small area first', 'Avoid spraying pollinators'),
    effectiveness=65
)

BIOLOGICAL_FUNGICIDE = Treatment(
    id='bacillus_subtilis',
    name='Bacillus subtilis Biofungicide',
    description='Beneficial bacteria that outcompete leaf pathogens',
    method='biological',
    application='Spray foliage at first sign of disease',
    frequency='Every 7 days',
    duration='3-4 weeks',
    precautions=('Store product below 25°C',),
    effectiveness=60
)

REMOVE_INFECTED = Treatment(
    id='remove_infected',
    name='Remove Infected Tissue',
    description='Prune and destroy infected leaves, fruit and stems',
    method='cultural',
    application='Cut 5 cm below visible symptoms and bag debris',
    frequency='Weekly',
    duration='Until no new symptoms appear',
    precautions=('Disinfect tools between cuts', 'Do not compost infected material'),
    effectiveness=55
)

REMOVE_PLANT = Treatment(
    id='remove_plant',
    name='Rogue Infected Plants',
    description='Remove whole plants with systemic infections to protect neighbours',
    method='cultural',
    application='Pull plant with root ball and destroy away from the field',
    frequency='Once',
    duration='Immediate',
    precautions=('Bag plants before moving them through the field',),
    effectiveness=90
)

COPPER_BACTERICIDE = Treatment(
    id='copper_bactericide',
    name='Copper Bactericide',
    description='Copper hydroxide with mancozeb slows bacterial spread',
    method='chemical',
    application='Spray on all foliage',
    frequency='Every 5-7 days during wet weather',
    duration='3-4 weeks',
    precautions=('Wear protective equipment', 'Copper can accumulate in soil'),
    effectiveness=70
)

# =============================================================================
# Shared Prevention Practices
# =============================================================================

CROP_ROTATION = Prevention(
    id='crop_rotation',
    name='Crop Rotation',
    description='Rotate crops annually to break disease cycles',
    methods=('Plant non-host crops for 2-3 seasons', 'Avoid planting related crops in sequence'),
    timing='Before planting season',
    frequency='Every year'
)

AIR_CIRCULATION = Prevention(
    id='air_circulation',
    name='Improve Air Circulation',
    description='Reduce leaf wetness by keeping foliage open',
    methods=('Space plants correctly', 'Prune lower and inner leaves', 'Stake or trellis plants'),
    timing='Throughout the growing season',
    frequency='Weekly'
)

DRIP_IRRIGATION = Prevention(
    id='drip_irrigation',
    name='Avoid Overhead Watering',
    description='Keep foliage dry to prevent spore germination and splash',
    methods=('Use drip irrigation or soaker hoses', 'Water early in the day'),
    timing='Throughout the growing season',
    frequency='Every watering'
)

SANITATION = Prevention(
    id='sanitation',
    name='Field Sanitation',
    description='Remove inoculum sources from the field',
    methods=('Clear plant debris after harvest', 'Control volunteer plants and weeds',
             'Disinfect tools regularly'),
    timing='End of season',
    frequency='Every season'
)

RESISTANT_VARIETIES = Prevention(
    id='resistant_varieties',
    name='Resistant Varieties',
    description='Grow cultivars bred for resistance to the disease',
    methods=('Check seed catalogues for resistance codes', 'Buy certified disease-free stock'),
    timing='At planting',
    frequency='Every planting'
)

VECTOR_CONTROL = Prevention(
    id='vector_control',
    name='Insect Vector Control',
    description='Keep insect vectors away from young plants',
    methods=('Use insect-proof netting on seedlings', 'Install yellow sticky traps',
             'Remove weed hosts around the field'),
    timing='From transplanting',
    frequency='Continuous'
)


# =============================================================================
# Disease Records
# =============================================================================

_DISEASES = [
    DiseaseRecord(
        id='apple_scab',
        name='Apple Scab',
        scientific_name='Venturia inaequalis',
        common_names=('Apple scab', 'Black spot'),
        description='A fungal disease causing olive-green to black lesions on apple leaves and fruit',
        symptoms=('Olive-green velvety spots on leaves', 'Corky scabs on fruit',
                  'Early leaf drop', 'Deformed fruit'),
        causes=('Fungal spores overwintering in fallen leaves', 'Cool wet spring weather'),
        treatments=(PROTECTANT_FUNGICIDE, SULFUR_SPRAY, REMOVE_INFECTED),
        prevention=(SANITATION, RESISTANT_VARIETIES, AIR_CIRCULATION),
        severity='medium'
    ),
    DiseaseRecord(
        id='black_rot',
        name='Black Rot',
        scientific_name='Botryosphaeria obtusa / Guignardia bidwellii',
        common_names=('Black rot', 'Frogeye leaf spot'),
        description='A fungal disease that rots fruit and spots leaves of apple and grape',
        symptoms=('Purple-bordered leaf spots', 'Black shrivelled fruit (mummies)',
                  'Cankers on branches'),
        causes=('Fungal infection through wounds', 'Warm wet weather', 'Mummified fruit left on plant'),
        treatments=(SYSTEMIC_FUNGICIDE, REMOVE_INFECTED),
        prevention=(SANITATION, AIR_CIRCULATION),
        severity='high'
    ),
    DiseaseRecord(
        id='cedar_apple_rust',
        name='Cedar Apple Rust',
        scientific_name='Gymnosporangium juniperi-virginianae',
        common_names=('Cedar apple rust',),
        description='A rust fungus alternating between apple trees and junipers',
        symptoms=('Bright orange-yellow leaf spots', 'Tube-like structures under leaves',
                  'Premature defoliation'),
        causes=('Spores from nearby juniper galls', 'Wet spring weather'),
        treatments=(SYSTEMIC_FUNGICIDE, SULFUR_SPRAY),
        prevention=(RESISTANT_VARIETIES, Prevention(
            id='remove_junipers',
            name='Remove Alternate Hosts',
            description='Remove junipers near orchards',
            methods=('Remove cedar galls in late winter', 'Keep junipers away from apple trees'),
            timing='Late winter',
            frequency='Every year'
        )),
        severity='medium'
    ),
    DiseaseRecord(
        id='powdery_mildew',
        name='Powdery Mildew',
        scientific_name='Podosphaera spp.',
        common_names=('Powdery mildew', 'White mould'),
        description='A fungal disease forming a white powdery coating on leaves and shoots',
        symptoms=('White powdery patches on leaves', 'Leaf curling and distortion',
                  'Stunted shoots'),
        causes=('High humidity with dry leaves', 'Shaded crowded plantings'),
        treatments=(SULFUR_SPRAY, NEEM_OIL, BIOLOGICAL_FUNGICIDE),
        prevention=(AIR_CIRCULATION, RESISTANT_VARIETIES),
        severity='medium'
    ),
    DiseaseRecord(
        id='gray_leaf_spot',
        name='Gray Leaf Spot',
        scientific_name='Cercospora zeae-maydis',
        common_names=('Cercospora leaf spot', 'Gray leaf spot'),
        description='A fungal disease of corn producing rectangular gray lesions',
        symptoms=('Rectangular tan to gray lesions between veins', 'Lesions merging to blight leaves'),
        causes=('Residue-borne fungus', 'Warm humid nights', 'Continuous corn planting'),
        treatments=(SYSTEMIC_FUNGICIDE,),
        prevention=(CROP_ROTATION, RESISTANT_VARIETIES, SANITATION),
        severity='high'
    ),
    DiseaseRecord(
        id='common_rust',
        name='Common Rust',
        scientific_name='Puccinia sorghi',
        common_names=('Common rust', 'Corn rust'),
        description='A rust fungus producing reddish-brown pustules on corn leaves',
        symptoms=('Cinnamon-brown pustules on both leaf surfaces', 'Leaf yellowing'),
        causes=('Wind-borne spores', 'Cool humid weather'),
        treatments=(SYSTEMIC_FUNGICIDE,),
        prevention=(RESISTANT_VARIETIES,),
        severity='low'
    ),
    DiseaseRecord(
        id='northern_leaf_blight',
        name='Northern Leaf Blight',
        scientific_name='Exserohilum turcicum',
        common_names=('Northern corn leaf blight', 'Turcicum leaf blight'),
        description='A fungal disease producing long cigar-shaped lesions on corn',
        symptoms=('Cigar-shaped gray-green lesions', 'Dead leaf tissue spreading upward'),
        causes=('Infected crop residue', 'Moderate temperatures with heavy dew'),
        treatments=(SYSTEMIC_FUNGICIDE,),
        prevention=(CROP_ROTATION, RESISTANT_VARIETIES, SANITATION),
        severity='high'
    ),
    DiseaseRecord(
        id='esca',
        name='Esca (Black Measles)',
        scientific_name='Phaeomoniella chlamydospora',
        common_names=('Black measles', 'Esca'),
        description='A grapevine trunk disease causing tiger-stripe leaves and spotted berries',
        symptoms=('Tiger-stripe leaf discoloration', 'Dark spots on berries', 'Sudden vine collapse'),
        causes=('Wood-infecting fungi entering pruning wounds',),
        treatments=(REMOVE_INFECTED, Treatment(
            id='wound_protection',
            name='Pruning Wound Protection',
            description='Seal pruning wounds with a fungicidal paste',
            method='cultural',
            application='Apply to fresh pruning cuts',
            frequency='After each pruning',
            duration='Dormant season',
            precautions=('Prune in dry weather',),
            effectiveness=50
        )),
        prevention=(SANITATION,),
        severity='critical'
    ),
    DiseaseRecord(
        id='grape_leaf_blight',
        name='Grape Leaf Blight',
        scientific_name='Pseudocercospora vitis',
        common_names=('Isariopsis leaf spot', 'Leaf blight'),
        description='A fungal disease producing angular brown spots on grape leaves',
        symptoms=('Dark brown angular spots', 'Yellow halos', 'Early leaf fall'),
        causes=('Humid weather late in the season',),
        treatments=(COPPER_FUNGICIDE, PROTECTANT_FUNGICIDE),
        prevention=(AIR_CIRCULATION, SANITATION),
        severity='medium'
    ),
    DiseaseRecord(
        id='bacterial_spot',
        name='Bacterial Spot',
        scientific_name='Xanthomonas spp.',
        common_names=('Bacterial spot', 'Bacterial leaf spot'),
        description='A bacterial disease spotting leaves and fruit of tomato, pepper and peach',
        symptoms=('Small water-soaked spots turning brown', 'Yellow halos around spots',
                  'Scabby raised fruit lesions'),
        causes=('Infected seed or transplants', 'Warm rainy weather', 'Splashing water'),
        treatments=(COPPER_BACTERICIDE, REMOVE_INFECTED),
        prevention=(DRIP_IRRIGATION, CROP_ROTATION, RESISTANT_VARIETIES),
        severity='medium'
    ),
    DiseaseRecord(
        id='early_blight',
        name='Early Blight',
        scientific_name='Alternaria solani',
        common_names=('Early blight', 'Target spot'),
        description='A fungal disease affecting tomatoes and potatoes',
        symptoms=('Dark spots on leaves', 'Concentric rings', 'Leaf yellowing', 'Defoliation'),
        causes=('Fungal infection', 'Wet conditions', 'Poor air circulation'),
        treatments=(COPPER_FUNGICIDE, PROTECTANT_FUNGICIDE, REMOVE_INFECTED),
        prevention=(CROP_ROTATION, DRIP_IRRIGATION, AIR_CIRCULATION),
        severity='medium'
    ),
    DiseaseRecord(
        id='late_blight',
        name='Late Blight',
        scientific_name='Phytophthora infestans',
        common_names=('Late blight', 'Potato blight'),
        description='A water mould disease that rapidly destroys potato and tomato foliage',
        symptoms=('Dark spots on leaves', 'White fungal growth', 'Leaf yellowing', 'Stem lesions'),
        causes=('Airborne sporangia', 'Cool wet weather', 'Infected seed tubers'),
        treatments=(COPPER_FUNGICIDE, SYSTEMIC_FUNGICIDE, REMOVE_PLANT),
        prevention=(CROP_ROTATION, SANITATION, RESISTANT_VARIETIES),
        severity='high'
    ),
    DiseaseRecord(
        id='leaf_scorch',
        name='Leaf Scorch',
        scientific_name='Diplocarpon earlianum',
        common_names=('Strawberry leaf scorch',),
        description='A fungal disease causing purple blotches that scorch strawberry leaves',
        symptoms=('Irregular dark purple blotches', 'Leaf margins drying out'),
        causes=('Spores on infected leaves', 'Prolonged leaf wetness'),
        treatments=(PROTECTANT_FUNGICIDE, REMOVE_INFECTED),
        prevention=(DRIP_IRRIGATION, SANITATION),
        severity='medium'
    ),
    DiseaseRecord(
        id='leaf_mold',
        name='Leaf Mold',
        scientific_name='Passalora fulva',
        common_names=('Tomato leaf mold',),
        description='A fungal disease of tomato common in greenhouses and high humidity',
        symptoms=('Pale yellow spots on upper leaf surface', 'Olive-green mould underneath'),
        causes=('Relative humidity above 85%', 'Poor ventilation'),
        treatments=(PROTECTANT_FUNGICIDE, BIOLOGICAL_FUNGICIDE),
        prevention=(AIR_CIRCULATION, RESISTANT_VARIETIES),
        severity='medium'
    ),
    DiseaseRecord(
        id='septoria_leaf_spot',
        name='Septoria Leaf Spot',
        scientific_name='Septoria lycopersici',
        common_names=('Septoria blight',),
        description='A fungal disease producing many small circular spots on tomato leaves',
        symptoms=('Small circular spots with gray centres', 'Dark spot margins', 'Lower leaf drop'),
        causes=('Spores splashed from soil', 'Warm wet weather'),
        treatments=(PROTECTANT_FUNGICIDE, COPPER_FUNGICIDE, REMOVE_INFECTED),
        prevention=(DRIP_IRRIGATION, CROP_ROTATION, SANITATION),
        severity='medium'
    ),
    DiseaseRecord(
        id='target_spot',
        name='Target Spot',
        scientific_name='Corynespora cassiicola',
        common_names=('Target spot',),
        description='A fungal disease forming ringed lesions on tomato leaves and fruit',
        symptoms=('Brown lesions with concentric rings', 'Pitted fruit lesions'),
        causes=('Warm humid conditions', 'Dense canopy'),
        treatments=(SYSTEMIC_FUNGICIDE, REMOVE_INFECTED),
        prevention=(AIR_CIRCULATION, SANITATION),
        severity='medium'
    ),
    DiseaseRecord(
        id='yellow_leaf_curl_virus',
        name='Tomato Yellow Leaf Curl Virus',
        scientific_name='Begomovirus TYLCV',
        common_names=('TYLCV', 'Leaf curl'),
        description='A whitefly-transmitted virus that stunts tomato plants',
        symptoms=('Upward curling yellow leaves', 'Severe stunting', 'Flower drop'),
        causes=('Transmission by whiteflies',),
        treatments=(REMOVE_PLANT,),
        prevention=(VECTOR_CONTROL, RESISTANT_VARIETIES),
        severity='critical'
    ),
    DiseaseRecord(
        id='mosaic_virus',
        name='Tomato Mosaic Virus',
        scientific_name='Tobamovirus ToMV',
        common_names=('Mosaic virus',),
        description='A highly contagious virus causing mottled leaves',
        symptoms=('Light and dark green mottling', 'Distorted fern-like leaves', 'Uneven fruit ripening'),
        causes=('Contaminated hands and tools', 'Infected seed'),
        treatments=(REMOVE_PLANT,),
        prevention=(SANITATION, RESISTANT_VARIETIES),
        severity='high'
    ),
]

DISEASES = {record.id: record for record in _DISEASES}
