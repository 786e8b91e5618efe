"""Minimal meal planner page served by the API."""

PLANNER_PAGE_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Daily Meal Planner</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      h1 { margin-bottom: 0.5rem; }
      .row { margin-bottom: 1rem; }
      input { padding: 0.4rem 0.6rem; }
      #query, #name { width: 420px; }
      .macro { width: 90px; }
      button { padding: 0.4rem 0.8rem; margin-right: 0.5rem; }
      ul { padding-left: 1rem; }
      li.result { cursor: pointer; }
      .error { color: #b00020; }
      pre { background: #f6f6f6; padding: 1rem; overflow: auto; }
    </style>
  </head>
  <body>
    <h1>Daily Meal Planner</h1>
    <p id="banner" class="error"></p>
    <div class="row">
      <label>Search foods</label><br />
      <input id="query" placeholder="e.g. chicken breast" oninput="queueSearch()" />
      <span id="searching"></span>
      <p id="search-error" class="error"></p>
      <ul id="results"></ul>
    </div>
    <form class="row" onsubmit="submitMeal(event)">
      <div class="row">
        <label>Meal name</label><br />
        <input id="name" required />
      </div>
      <div class="row">
        <label>Quantity</label>
        <input id="quantity" class="macro" type="number" min="0.1" step="0.1"
          value="1" oninput="rescale()" />
        <label>Calories</label>
        <input id="calories" class="macro" type="number" step="any" value="0" />
        <label>Protein (g)</label>
        <input id="protein" class="macro" type="number" step="any" value="0" />
        <label>Carbs (g)</label>
        <input id="carbs" class="macro" type="number" step="any" value="0" />
        <label>Fats (g)</label>
        <input id="fats" class="macro" type="number" step="any" value="0" />
      </div>
      <button id="submit" type="submit">Add Meal</button>
    </form>
    <h2>Daily Totals</h2>
    <pre id="totals">Loading...</pre>
    <h2>Today's Meals</h2>
    <ul id="meals"></ul>
    <script>
      const MIN_QUERY_LENGTH = 2;
      let searchTimer = null;
      let searchSeq = 0;
      let baseNutrients = null;

      function queueSearch() {
        clearTimeout(searchTimer);
        searchTimer = setTimeout(runSearch, 300);
      }

      async function runSearch() {
        const query = document.getElementById('query').value;
        const seq = ++searchSeq;
        document.getElementById('search-error').textContent = '';
        if (query.trim().length < MIN_QUERY_LENGTH) {
          renderResults([]);
          return;
        }
        document.getElementById('searching').textContent = 'Searching...';
        let foods = null;
        try {
          const res = await fetch('/food-search?query=' + encodeURIComponent(query));
          if (res.ok) foods = await res.json();
        } catch (err) {
          foods = null;
        } finally {
          if (seq === searchSeq) {
            document.getElementById('searching').textContent = '';
          }
        }
        if (seq !== searchSeq) return;
        if (foods === null) {
          document.getElementById('search-error').textContent = 'Search failed';
          renderResults([]);
          return;
        }
        renderResults(foods);
      }

      function renderResults(foods) {
        const list = document.getElementById('results');
        list.innerHTML = '';
        for (const food of foods) {
          const item = document.createElement('li');
          item.className = 'result';
          item.textContent = food.name + ' - ' + food.brandOwner + ' ('
            + food.nutrients.calories + ' kcal)';
          item.onclick = () => selectFood(food);
          list.appendChild(item);
        }
      }

      function selectFood(food) {
        searchSeq++;
        baseNutrients = food.nutrients;
        document.getElementById('name').value =
          food.name + ' (' + food.servingSize + food.servingSizeUnit + ')';
        document.getElementById('quantity').value = 1;
        document.getElementById('query').value = '';
        renderResults([]);
        rescale();
      }

      function rescale() {
        if (!baseNutrients) return;
        const m = Number(document.getElementById('quantity').value);
        document.getElementById('calories').value =
          Math.round(baseNutrients.calories * m);
        for (const key of ['protein', 'carbs', 'fats']) {
          document.getElementById(key).value =
            Math.round(baseNutrients[key] * m * 10) / 10;
        }
      }

      async function submitMeal(event) {
        event.preventDefault();
        const button = document.getElementById('submit');
        const banner = document.getElementById('banner');
        const m = Number(document.getElementById('quantity').value);
        let name = document.getElementById('name').value;
        if (m > 1) name = m + 'x ' + name;
        const body = { name };
        for (const key of ['calories', 'protein', 'carbs', 'fats']) {
          body[key] = Number(document.getElementById(key).value);
        }
        button.disabled = true;
        banner.textContent = '';
        let saved = false;
        try {
          const res = await fetch('/meals', {
            method: 'POST',
            headers: { 'Content-Type': 'application/json' },
            body: JSON.stringify(body)
          });
          saved = res.ok;
        } catch (err) {
          saved = false;
        } finally {
          button.disabled = false;
        }
        if (!saved) {
          banner.textContent = 'Failed to save meal';
          return;
        }
        baseNutrients = null;
        document.getElementById('name').value = '';
        document.getElementById('quantity').value = 1;
        for (const key of ['calories', 'protein', 'carbs', 'fats']) {
          document.getElementById(key).value = 0;
        }
        await loadMeals();
      }

      async function loadMeals() {
        let meals;
        let totals;
        try {
          const [mealsRes, totalsRes] = await Promise.all([
            fetch('/meals'), fetch('/meals/totals')
          ]);
          if (!mealsRes.ok || !totalsRes.ok) throw new Error('load failed');
          meals = await mealsRes.json();
          totals = await totalsRes.json();
        } catch (err) {
          document.getElementById('banner').textContent = 'Failed to load meals';
          return;
        }
        document.getElementById('totals').textContent =
          'Calories: ' + totals.calories + '\\n'
          + 'Protein: ' + totals.protein + 'g\\n'
          + 'Carbs: ' + totals.carbs + 'g\\n'
          + 'Fats: ' + totals.fats + 'g';
        const list = document.getElementById('meals');
        list.innerHTML = '';
        if (!meals.length) {
          list.innerHTML = '<li>No meals added yet</li>';
          return;
        }
        for (const meal of meals) {
          const item = document.createElement('li');
          item.textContent = meal.name + ': ' + meal.calories + ' calories | P: '
            + meal.protein + 'g | C: ' + meal.carbs + 'g | F: ' + meal.fats + 'g';
          list.appendChild(item);
        }
      }

      loadMeals();
    </script>
  </body>
</html>
"""
