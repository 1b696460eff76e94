"""Reference and demo seed rows for the home chef marketplace.

Reference data (roles, categories, coupons) is required by the services.
Demo data (accounts, chef profiles, recipes, addresses and a handful of
delivered sample orders) is optional and only loaded with
`homechef seed --demo`. Demo passwords are not stored here; every demo
account gets settings.seed_demo_password, hashed at seed time.
Aggregates (ratings, totals) are never seeded as values; the sample orders
produce them through the services.
"""
from datetime import date

CATEGORIES = [
    ("Biryani & Rice", "Traditional rice dishes and biryani"),
    ("Kebabs & Grilled", "Charcoal grilled meats and kebabs"),
    ("Curries & Gravies", "Rich curries and traditional gravy dishes"),
    ("Breads", "Fresh naan, paratha, roti and bread items"),
    ("Breakfast", "Traditional halwa puri, nihari, and breakfast items"),
    ("Desserts & Sweets", "Traditional sweets and desserts"),
    ("Healthy Meals", "Light and nutritious Pakistani dishes"),
    ("Quick Meals", "Ready in 30 minutes or less"),
]

COUPONS = [
    # code, type, value, min_order, max_discount, valid_from, valid_until, usage_limit
    ("RAMADAN20", "percentage", "20.00", "500.00", "200.00", date(2024, 3, 1), date(2024, 4, 30), 1000),
    ("NEWUSER15", "percentage", "15.00", "300.00", "150.00", date(2024, 1, 1), date(2024, 12, 31), 500),
    ("KARACHI100", "fixed", "100.00", "1000.00", None, date(2024, 1, 1), date(2024, 12, 31), 200),
    ("LAHORE50", "fixed", "50.00", "500.00", None, date(2024, 2, 1), date(2024, 12, 31), 300),
    ("PAKISTAN25", "percentage", "25.00", "800.00", "300.00", date(2024, 1, 1), date(2024, 12, 31), 600),
]

ADMINS = [
    ("admin1", "admin1@homechef.pk", "03001000001"),
    ("admin2", "admin2@homechef.pk", "03001000002"),
]

# username, email, phone, chef_name, bio, specialization, experience_years
CHEFS = [
    ("chef_ali", "ali.khan@homechef.pk", "03101111111", "Ali Khan",
     "Master of traditional Karachi biryani with 15 years experience", "Biryani & Rice", 15),
    ("chef_asim", "asim.malik@homechef.pk", "03101111112", "Asim Malik",
     "Expert in authentic Sindhi and Balochi cuisine", "Curries & Gravies", 12),
    ("chef_fatima", "fatima.ahmed@homechef.pk", "03101111113", "Fatima Ahmed",
     "Specialist in Lahori street food and kebabs", "Kebabs & Grilled", 10),
    ("chef_bilal", "bilal.raza@homechef.pk", "03101111114", "Bilal Raza",
     "Traditional halwa puri and breakfast expert", "Breakfast", 11),
    ("chef_sara", "sara.hassan@homechef.pk", "03101111115", "Sara Hassan",
     "Specialist in curries and traditional gravy dishes", "Curries & Gravies", 13),
    ("chef_hassan", "hassan.shah@homechef.pk", "03101111116", "Hassan Shah",
     "Expert in desi desserts and sweet meats", "Desserts & Sweets", 9),
    ("chef_nadia", "nadia.khan@homechef.pk", "03101111117", "Nadia Khan",
     "Master of nihari and slow-cooked traditional dishes", "Curries & Gravies", 14),
    ("chef_omar", "omar.malik@homechef.pk", "03101111118", "Omar Malik",
     "Specialist in healthy desi meals and diet recipes", "Healthy Meals", 8),
    ("chef_ayesha", "ayesha.ahmed@homechef.pk", "03101111119", "Ayesha Ahmed",
     "Expert in Peshawar and Northern Pakistani cuisine", "Kebabs & Grilled", 11),
    ("chef_salman", "salman.shah@homechef.pk", "03101111120", "Salman Shah",
     "Specialist in fusion and modern Pakistani cooking", "Quick Meals", 7),
]

CUSTOMERS = [
    ("user_zaid", "zaid.hassan@email.pk", "03001234501"),
    ("user_dada", "dada.khan@email.pk", "03001234502"),
    ("user_hina", "hina.malik@email.pk", "03001234503"),
    ("user_tariq", "tariq.raza@email.pk", "03001234504"),
    ("user_sana", "sana.ahmed@email.pk", "03001234505"),
    ("user_waqas", "waqas.hassan@email.pk", "03001234506"),
    ("user_kiran", "kiran.shah@email.pk", "03001234507"),
    ("user_rehan", "rehan.khan@email.pk", "03001234508"),
    ("user_maira", "maira.malik@email.pk", "03001234509"),
    ("user_usman", "usman.raza@email.pk", "03001234510"),
    ("user_faisal", "faisal.ahmed@email.pk", "03001234511"),
    ("user_sophie", "sophie.hassan@email.pk", "03001234512"),
    ("user_amina", "amina.hassan@email.pk", "03001234513"),
    ("user_iqra", "iqra.khan@email.pk", "03001234514"),
    ("user_noor", "noor.malik@email.pk", "03001234515"),
    ("user_yasir", "yasir.raza@email.pk", "03001234516"),
    ("user_rabia", "rabia.ahmed@email.pk", "03001234517"),
    ("user_azhar", "azhar.hassan@email.pk", "03001234518"),
    ("user_rina", "rina.shah@email.pk", "03001234519"),
    ("user_wasim", "wasim.khan@email.pk", "03001234520"),
    ("user_sara2", "sara2.malik@email.pk", "03001234521"),
    ("user_haider", "haider.raza@email.pk", "03001234522"),
    ("user_zara", "zara.ahmed@email.pk", "03001234523"),
    ("user_fahad", "fahad.hassan@email.pk", "03001234524"),
    ("user_gina", "gina.shah@email.pk", "03001234525"),
    ("user_karim", "karim.khan@email.pk", "03001234526"),
    ("user_huma", "huma.malik@email.pk", "03001234527"),
    ("user_laiq", "laiq.raza@email.pk", "03001234528"),
    ("user_isha", "isha.ahmed@email.pk", "03001234529"),
    ("user_maqbool", "maqbool.hassan@email.pk", "03001234530"),
    ("user_neha", "neha.shah@email.pk", "03001234531"),
    ("user_nasir", "nasir.khan@email.pk", "03001234532"),
    ("user_olivia", "olivia.malik@email.pk", "03001234533"),
    ("user_pavel", "pavel.raza@email.pk", "03001234534"),
    ("user_priya", "priya.ahmed@email.pk", "03001234535"),
    ("user_qadir", "qadir.hassan@email.pk", "03001234536"),
    ("user_qurat", "qurat.shah@email.pk", "03001234537"),
    ("user_rashid", "rashid.khan@email.pk", "03001234538"),
    ("user_ruby", "ruby.malik@email.pk", "03001234539"),
    ("user_rauf", "rauf.raza@email.pk", "03001234540"),
    ("user_safiya", "safiya.ahmed@email.pk", "03001234541"),
    ("user_sameen", "sameen.hassan@email.pk", "03001234542"),
    ("user_tahir", "tahir.shah@email.pk", "03001234543"),
    ("user_tina", "tina.khan@email.pk", "03001234544"),
    ("user_umayr", "umayr.malik@email.pk", "03001234545"),
    ("user_una", "una.raza@email.pk", "03001234546"),
    ("user_vahid", "vahid.ahmed@email.pk", "03001234547"),
    ("user_vanessa", "vanessa.hassan@email.pk", "03001234548"),
    ("user_waheed", "waheed.shah@email.pk", "03001234549"),
    ("user_wilma", "wilma.khan@email.pk", "03001234550"),
    ("user_xavier", "xavier.malik@email.pk", "03001234551"),
    ("user_xenia", "xenia.raza@email.pk", "03001234552"),
    ("user_yousaf", "yousaf.ahmed@email.pk", "03001234553"),
    ("user_yasmin", "yasmin.hassan@email.pk", "03001234554"),
    ("user_zakir", "zakir.shah@email.pk", "03001234555"),
    ("user_zoya", "zoya.khan@email.pk", "03001234556"),
    ("user_zulfiqar", "zulfiqar.malik@email.pk", "03001234557"),
    ("user_zahra", "zahra.raza@email.pk", "03001234558"),
    ("user_zia", "zia.ahmed@email.pk", "03001234559"),
    ("user_zainab", "zainab.hassan@email.pk", "03001234560"),
]

# customer username, line1, city, state, zip, type
ADDRESSES = [
    ("user_zaid", "Plot 123, Gulshan-e-Iqbal", "Karachi", "Sindh", "75300", "home"),
    ("user_dada", "Street 5, Defence", "Lahore", "Punjab", "54000", "home"),
    ("user_hina", "House 47, F-8", "Islamabad", "ICT", "44000", "home"),
    ("user_tariq", "Apt 201, Clifton", "Karachi", "Sindh", "75600", "work"),
    ("user_sana", "Plot 89, DHA", "Lahore", "Punjab", "54792", "home"),
    ("user_waqas", "House 12, Bahria Town", "Rawalpindi", "Punjab", "46000", "home"),
    ("user_kiran", "Street 15, Shadman", "Lahore", "Punjab", "54000", "home"),
    ("user_rehan", "Block C, North Karachi", "Karachi", "Sindh", "75850", "home"),
    ("user_maira", "Plot 456, Johar Town", "Lahore", "Punjab", "54600", "home"),
    ("user_usman", "House 89, Blue Area", "Islamabad", "ICT", "44000", "home"),
]

_PEXELS = "https://images.pexels.com/photos/{0}/pexels-photo-{0}.jpeg"

# chef username, category, name, description, ingredients, instructions, price, prep minutes, servings, image id
RECIPES = [
    ("chef_ali", "Biryani & Rice", "pulahoo", "Traditional Pakistani rice pilaf with spices",
     "Basmati rice, onions, spices, ghee",
     "Cook rice with spices and ghee", 250, 45, 4, 723198),
    ("chef_ali", "Biryani & Rice", "fish biryani", "Spicy fish biryani with coastal flavors",
     "Fish, basmati rice, spices, coconut milk",
     "Layer fish with spiced rice", 350, 50, 3, 1284225),
    ("chef_ali", "Biryani & Rice", "karachi biryani", "Authentic Karachi style layered biryani",
     "Basmati rice, mutton, yogurt, ginger garlic, spices",
     "Layer rice and marinated meat, cook on high heat", 450, 60, 4, 5410409),
    ("chef_ali", "Biryani & Rice", "lahori biryani", "Traditional Lahore biryani with meat on top",
     "Basmati rice, beef, yogurt, ginger garlic, spices",
     "Cook meat first, then layer with partially cooked rice", 400, 50, 4, 5410410),
    ("chef_ali", "Biryani & Rice", "hyderabadi biryani", "Spicy Hyderabadi style biryani with goat meat",
     "Basmati rice, goat meat, yogurt, ginger garlic, mint",
     "Layer method with puri underneath", 480, 70, 4, 5410409),
    ("chef_fatima", "Kebabs & Grilled", "seekh kebab", "Ground meat kebab on skewer",
     "Ground mutton, onions, ginger garlic, green chili",
     "Mix, mold on skewer, grill on charcoal", 200, 25, 2, 5410411),
    ("chef_fatima", "Kebabs & Grilled", "shami kebab", "Lentil and meat kebab served with chutneys",
     "Ground mutton, lentils, onions, ginger garlic",
     "Boil lentils, mix with meat, fry", 180, 30, 3, 5410411),
    ("chef_ayesha", "Kebabs & Grilled", "galauti kebab", "Melt-in-mouth mutton kebab with papaya",
     "Ground mutton, papaya, onions, mint",
     "Tender meat preparation with spices", 220, 35, 2, 5410411),
    ("chef_ayesha", "Kebabs & Grilled", "chapli kebab", "Flat meat kebab with lentils from Peshawar",
     "Ground beef, lentils, onions, coriander, mint",
     "Shape flat, fry in ghee", 200, 20, 2, 5410411),
    ("chef_fatima", "Kebabs & Grilled", "tikka kebab", "Marinated meat pieces grilled to perfection",
     "Chicken or meat pieces, yogurt, spices, lemon",
     "Marinate, grill on skewer", 240, 30, 3, 5410411),
    ("chef_ayesha", "Kebabs & Grilled", "tandoori chicken", "Clay oven cooked chicken with Indian spices",
     "Chicken pieces, yogurt, ginger garlic, tandoori spice",
     "Marinate overnight, cook in tandoor", 280, 45, 3, 5410407),
    ("chef_fatima", "Kebabs & Grilled", "boti kebab", "Meat cubes on skewer with charcoal flavor",
     "Beef or mutton chunks, yogurt, ginger garlic",
     "Marinate, skewer, grill", 250, 30, 3, 5410411),
    ("chef_ayesha", "Kebabs & Grilled", "fish tikka", "Marinated fish pieces with turmeric and lemon",
     "Fish fillets, yogurt, ginger, turmeric, lemon",
     "Marinate, skewer, grill gently", 300, 25, 2, 1284225),
    ("chef_asim", "Curries & Gravies", "karahi chicken", "Spicy wok-cooked chicken with tomatoes",
     "Chicken pieces, tomatoes, ginger, green chili, karahi",
     "Cook in wok on high heat with spices", 320, 30, 3, 5410407),
    ("chef_nadia", "Curries & Gravies", "nihari", "Slow cooked meat stew served with naan",
     "Beef shank, ginger garlic, yogurt, nihari masala",
     "Slow cook overnight, serve with naan", 400, 480, 4, 5410412),
    ("chef_nadia", "Curries & Gravies", "paya", "Trotters slow cooked curry for breakfast",
     "Goat or beef trotters, ginger garlic, yogurt, spices",
     "Long slow cooking, traditional breakfast item", 350, 420, 4, 5410412),
    ("chef_asim", "Curries & Gravies", "korma", "Creamy meat curry with yogurt and spices",
     "Mutton, yogurt, cream, ginger garlic, spices",
     "Cook meat tender, add cream", 380, 60, 4, 5410407),
    ("chef_sara", "Curries & Gravies", "haleem", "Meat and lentils slow cooked overnight",
     "Beef, lentils, wheat, spices, ginger garlic",
     "Cook overnight, break down meat", 320, 480, 4, 5410412),
    ("chef_sara", "Curries & Gravies", "achari chicken", "Pickled spice chicken with tangy flavor",
     "Chicken, yogurt, achari masala, pickled spices",
     "Marinate in pickle spices", 300, 35, 3, 5410407),
    ("chef_sara", "Curries & Gravies", "saag meat", "Meat with spinach gravy",
     "Meat pieces, spinach, yogurt, ginger garlic",
     "Cook meat, add spinach puree", 280, 40, 3, 1309650),
    ("chef_asim", "Curries & Gravies", "dopiaza", "Two onion curry with chicken or meat",
     "Chicken or meat, onions added twice, tomato gravy",
     "Add onions at different stages", 300, 35, 3, 5410407),
    ("chef_nadia", "Curries & Gravies", "butter chicken", "Creamy tomato chicken with butter",
     "Chicken pieces, cream, butter, tomato sauce",
     "Cook chicken in creamy tomato gravy", 320, 30, 3, 5410407),
    ("chef_sara", "Curries & Gravies", "aloo meat", "Meat with potatoes and spices",
     "Meat, potatoes, onions, tomatoes, spices",
     "Cook meat, add potato chunks", 270, 45, 3, 1309650),
    ("chef_bilal", "Breads", "naan", "Tandoor cooked flatbread with garlic",
     "Maida flour, yogurt, yeast, salt, ghee",
     "Ferment dough, cook in tandoor", 80, 15, 4, 1279330),
    ("chef_bilal", "Breads", "roti", "Whole wheat flatbread cooked on tawa",
     "Whole wheat flour, salt, water",
     "Knead dough, roll thin, cook on tawa", 40, 10, 4, 1279330),
    ("chef_bilal", "Breads", "paratha", "Layered flatbread with ghee",
     "Whole wheat flour, ghee, salt",
     "Knead, layer with ghee, roll, cook", 60, 15, 3, 5410413),
    ("chef_bilal", "Breads", "aloo paratha", "Potato filled paratha with spices",
     "Wheat flour, boiled potatoes, spices, ghee",
     "Stuff with seasoned potato, cook", 100, 20, 2, 5410413),
    ("chef_bilal", "Breads", "keema paratha", "Minced meat paratha with ghee",
     "Wheat flour, cooked keema, ghee",
     "Stuff with meat filling, cook", 120, 20, 2, 5410413),
    ("chef_bilal", "Breakfast", "halwa puri", "Sweet semolina with fried bread",
     "Semolina, ghee, chickpeas, sugar, puri",
     "Make halwa, fry puri separately", 150, 45, 3, 5410413),
    ("chef_bilal", "Breakfast", "chana bhatura", "Chickpeas with fried bread",
     "Chickpeas, onions, spices, maida flour",
     "Cook chickpeas, fry bhatura", 180, 30, 2, 5410413),
    ("chef_bilal", "Breakfast", "dahi barey", "Lentil fritters in yogurt",
     "Urid dal, yogurt, tamarind, mint",
     "Fry dal, soak in yogurt", 120, 20, 3, 5410413),
    ("chef_bilal", "Breakfast", "parathas with sabzi", "Spinach and herbs paratha breakfast",
     "Wheat flour, spinach, herbs, ghee",
     "Knead with herbs, roll, cook", 100, 25, 2, 5410413),
    ("chef_bilal", "Breakfast", "sohan halwa", "Sweet brittle halwa with nuts",
     "Atta flour, ghee, sugar, seeds",
     "Cook flour in ghee, add sugar", 200, 30, 4, 5410414),
    ("chef_hassan", "Desserts & Sweets", "kheer", "Rice pudding with condensed milk",
     "Basmati rice, milk, condensed milk, nuts, cardamom",
     "Cook rice in milk, add condensed milk", 180, 45, 4, 5410414),
    ("chef_hassan", "Desserts & Sweets", "gulab jamun", "Milk solid dumplings in syrup",
     "Milk powder, maida, ghee, sugar syrup",
     "Fry dumplings, soak in hot syrup", 200, 40, 8, 5410415),
    ("chef_hassan", "Desserts & Sweets", "barfi", "Milk fudge with pistachio",
     "Condensed milk, ghee, coconut, pistachio",
     "Mix and set on tray, cut into pieces", 220, 30, 12, 5410415),
    ("chef_hassan", "Desserts & Sweets", "khubani ka meetha", "Apricot dessert with cream",
     "Dried apricots, condensed milk, cream, nuts",
     "Cook apricots, mix with cream", 250, 40, 4, 5410415),
    ("chef_hassan", "Desserts & Sweets", "seviyan kheer", "Vermicelli pudding with milk",
     "Seviyan, milk, condensed milk, nuts, ghee",
     "Fry seviyan, cook in milk", 190, 30, 4, 5410414),
    ("chef_hassan", "Desserts & Sweets", "firdausi", "Layered dessert with custard",
     "Puff pastry, custard, chocolate, cream",
     "Layer pastry with custard and cream", 280, 45, 4, 5410415),
    ("chef_hassan", "Desserts & Sweets", "jalebi with dahi", "Sweet spirals with yogurt",
     "Maida, sugar syrup, yogurt",
     "Deep fry spirals, soak in syrup", 150, 30, 2, 5410415),
    ("chef_omar", "Healthy Meals", "grilled chicken salad", "Healthy grilled chicken with fresh vegetables",
     "Chicken breast, lettuce, tomatoes, cucumber, lemon",
     "Grill chicken, chop vegetables, toss", 250, 20, 2, 5410407),
    ("chef_omar", "Healthy Meals", "lentil curry light", "Light lentil curry with minimal oil",
     "Lentils, onions, tomatoes, ginger, spices",
     "Cook lentils, make curry gravy", 180, 30, 3, 5410407),
    ("chef_omar", "Healthy Meals", "grilled fish with herbs", "Grilled fish with fresh herbs and lemon",
     "Fish fillets, lemon, herbs, olive oil",
     "Season fish, grill until cooked", 320, 25, 2, 1284225),
    ("chef_omar", "Healthy Meals", "vegetable pulao", "One-pot vegetable pulao",
     "Basmati rice, mixed vegetables, ghee, spices",
     "Cook vegetables and rice together", 220, 35, 3, 723198),
    ("chef_omar", "Healthy Meals", "chickpea salad", "Protein-rich chickpea salad",
     "Chickpeas, onions, tomatoes, coriander, lemon",
     "Mix all ingredients with lemon juice", 160, 15, 2, 5410413),
    ("chef_salman", "Quick Meals", "biryani express", "Quick 30-minute biryani",
     "Basmati rice, cooked meat, spices, ghee",
     "Use cooked meat, quick assembly", 350, 30, 3, 5410409),
    ("chef_salman", "Quick Meals", "fried rice", "Indo-Chinese fried rice with vegetables",
     "Cooked rice, eggs, vegetables, soy sauce",
     "Quick stir fry method", 200, 20, 2, 723198),
    ("chef_salman", "Quick Meals", "karahi express", "Quick 20-minute karahi",
     "Pre-cooked chicken, tomatoes, ginger, karahi",
     "Fast wok cooking", 280, 20, 2, 5410407),
    ("chef_salman", "Quick Meals", "pulao quick", "One-pot rice meal in 25 minutes",
     "Rice, vegetables, meat, water",
     "Single pot quick cooking", 300, 25, 3, 723198),
    ("chef_salman", "Quick Meals", "egg fried rice", "Quick egg fried rice with vegetables",
     "Eggs, cooked rice, mixed vegetables, oil",
     "Stir fry with high heat", 180, 15, 2, 723198),
]

# Sample orders are placed, delivered, paid and rated through the services, so
# totals, coupon usage and chef/recipe aggregates come out consistent.
# customer, chef, [(recipe, quantity)], coupon, order day, payment method, (rated recipe, stars, review)
SAMPLE_ORDERS = [
    ("user_zaid", "chef_ali", [("karachi biryani", 2)], "RAMADAN20", date(2024, 3, 15), "card",
     ("karachi biryani", 5, "Excellent biryani! Tasted just like homemade.")),
    ("user_dada", "chef_fatima", [("seekh kebab", 2)], "NEWUSER15", date(2024, 4, 2), "jazzcash",
     ("seekh kebab", 4, "Great kebabs, will order again.")),
    ("user_hina", "chef_asim", [("karahi chicken", 1)], None, date(2024, 4, 10), "easypaisa",
     ("karahi chicken", 5, "Perfect karahi chicken, highly recommended!")),
    ("user_tariq", "chef_ali", [("fish biryani", 2), ("lahori biryani", 1)], "KARACHI100", date(2024, 5, 6), "card",
     ("fish biryani", 5, "Best biryani in town, authentic taste.")),
    ("user_sana", "chef_bilal", [("halwa puri", 2)], "NEWUSER15", date(2024, 5, 19), "cash",
     ("halwa puri", 4, "Good breakfast option, prompt delivery.")),
]


def image_url(image_id: int) -> str:
    return _PEXELS.format(image_id)
