# =============================================================================
# PlantScan Backend
# knowledge/pests.py - Pest Reference Data
# =============================================================================

from plantscan.knowledge.records import PestRecord, Treatment, Prevention


INSECTICIDAL_SOAP = Treatment(
    id='insecticidal_soap',
    name='Insecticidal Soap',
    description='Potassium fatty acid soap kills soft-bodied insects on contact',
    method='organic',
    application='Spray directly on insects, especially under leaves',
    frequency='Every 5-7 days',
    duration='2-3 weeks',
    precautions=('Avoid spraying in full sun', 'Test on sensitive plants first'),
    effectiveness=70
)

INSECTICIDE = Treatment(
    id='insecticide',
    name='Insecticide Treatment',
    description='Apply a registered contact or systemic insecticide',
    method='chemical',
    application='Spray on affected areas',
    frequency='Every 7-10 days',
    duration='2-3 weeks',
    precautions=('Wear protective equipment', 'Avoid overuse', 'Protect pollinators'),
    effectiveness=85
)

MITICIDE = Treatment(
    id='miticide',
    name='Miticide',
    description='Apply abamectin or a sulfur-based miticide',
    method='chemical',
    application='Thorough spray of leaf undersides',
    frequency='Every 7 days',
    duration='2-3 applications',
    precautions=('Rotate active ingredients', 'Wear protective equipment'),
    effectiveness=80
)

PREDATORY_INSECTS = Treatment(
    id='predatory_insects',
    name='Release Natural Enemies',
    description='Release ladybugs, lacewings or predatory mites',
    method='biological',
    application='Release at dusk near infested plants',
    frequency='Every 2 weeks',
    duration='Until population is controlled',
    precautions=('Stop broad-spectrum sprays before release',),
    effectiveness=65
)

NATURAL_PREDATORS = Prevention(
    id='natural_predators',
    name='Natural Predators',
    description='Encourage beneficial insects that feed on pests',
    methods=('Introduce ladybugs', 'Use neem oil', 'Plant flowering borders'),
    timing='Before infestation',
    frequency='As needed'
)

REGULAR_SCOUTING = Prevention(
    id='regular_scouting',
    name='Regular Scouting',
    description='Inspect leaf undersides to catch infestations early',
    methods=('Check 10 plants per bed', 'Use a hand lens', 'Use yellow or blue sticky traps'),
    timing='Throughout the season',
    frequency='Twice weekly'
)

WATER_STRESS = Prevention(
    id='avoid_water_stress',
    name='Avoid Water Stress',
    description='Stressed plants in dry dusty conditions favour mites',
    methods=('Water consistently', 'Mist foliage in hot dry weather'),
    timing='Hot dry periods',
    frequency='Daily'
)


_PESTS = [
    PestRecord(
        id='aphids',
        name='Aphids',
        scientific_name='Aphis gossypii',
        pest_type='insect',
        description='Small sap-sucking insects that attack plants',
        common_names=('Greenfly', 'Plant lice'),
        symptoms=('Yellowing leaves', 'Stunted growth', 'Honeydew secretion'),
        damage=('Yellowing leaves', 'Stunted growth', 'Honeydew secretion', 'Virus transmission'),
        treatments=(INSECTICIDAL_SOAP, INSECTICIDE, PREDATORY_INSECTS),
        prevention=(NATURAL_PREDATORS, REGULAR_SCOUTING),
        severity='medium'
    ),
    PestRecord(
        id='whiteflies',
        name='Whiteflies',
        scientific_name='Bemisia tabaci',
        pest_type='insect',
        description='Tiny white flying insects feeding on leaf undersides',
        common_names=('Silverleaf whitefly',),
        symptoms=('Clouds of white insects when disturbed', 'Sticky leaves', 'Sooty mould'),
        damage=('Weakened plants', 'Transmission of leaf curl viruses'),
        treatments=(INSECTICIDAL_SOAP, INSECTICIDE),
        prevention=(REGULAR_SCOUTING, NATURAL_PREDATORS),
        severity='high'
    ),
    PestRecord(
        id='thrips',
        name='Thrips',
        scientific_name='Frankliniella occidentalis',
        pest_type='insect',
        description='Slender insects rasping leaf and flower tissue',
        symptoms=('Silvery streaks on leaves', 'Black specks of frass', 'Deformed flowers'),
        damage=('Scarred fruit', 'Tospovirus transmission'),
        treatments=(INSECTICIDAL_SOAP, INSECTICIDE, PREDATORY_INSECTS),
        prevention=(REGULAR_SCOUTING,),
        severity='medium'
    ),
    PestRecord(
        id='spider_mites',
        name='Two-Spotted Spider Mite',
        scientific_name='Tetranychus urticae',
        pest_type='mite',
        description='Tiny arachnids that suck cell contents from leaves, thriving in hot dry weather',
        common_names=('Red spider mite', 'Two-spotted mite'),
        symptoms=('Fine yellow stippling on leaves', 'Fine webbing', 'Bronzed dry leaves'),
        damage=('Reduced photosynthesis', 'Leaf drop', 'Reduced yield'),
        treatments=(MITICIDE, PREDATORY_INSECTS, INSECTICIDAL_SOAP),
        prevention=(WATER_STRESS, REGULAR_SCOUTING, NATURAL_PREDATORS),
        severity='medium'
    ),
    PestRecord(
        id='leaf_miners',
        name='Leaf Miners',
        scientific_name='Liriomyza spp.',
        pest_type='insect',
        description='Fly larvae tunnelling between leaf surfaces',
        symptoms=('Winding white trails in leaves', 'Blotches on leaves'),
        damage=('Reduced leaf area', 'Entry points for disease'),
        treatments=(PREDATORY_INSECTS, INSECTICIDE),
        prevention=(REGULAR_SCOUTING,),
        severity='low'
    ),
]

PESTS = {record.id: record for record in _PESTS}
