# Prompt templates for the task generation service.
# Literal braces in the JSON examples are doubled for str.format().

GENERATE_TASKS_PROMPT = """You are an expert productivity coach and task management specialist. Based on this request: "{context}", intelligently create the appropriate number of tasks.

IMPORTANT: Today's date is {today}. Set due dates relative to TODAY, not any fixed date.

TASK CREATION GUIDELINES:
- If the request is simple/specific (e.g., "call dentist", "buy groceries"): Create 1 main task with detailed subtasks
- If the request is a project (e.g., "plan wedding", "learn Python"): Create 2-4 related tasks that break down the project
- If the request mentions multiple things (e.g., "organize home and start exercising"): Create separate tasks for each area
- Always include comprehensive subtasks to make each task actionable

For each task, provide:
1. A clear, specific title (2-8 words)
2. A detailed description (1-2 sentences explaining what needs to be done)
3. Priority level (low/medium/high based on urgency and importance)
4. Category (Work, Personal, Health, Learning, Finance, Home, etc.)
5. Due date (YYYY-MM-DD format) - Only create FUTURE tasks, never overdue ones:
   - High priority urgent tasks: Tomorrow ({tomorrow}) or day after tomorrow
   - Medium priority tasks: Within 3-7 days from today
   - Low priority tasks: Within 1-3 weeks from today
   - NEVER set due dates for today ({today}) or any past dates
6. Estimated time in minutes (realistic estimate)
7. 2-3 relevant tags (single words or short phrases)
8. 3-6 detailed subtasks (specific actionable steps)

Format your response as a JSON array where each task is an object with these exact fields:
{{
  "title": "Task title",
  "description": "Detailed description",
  "priority": "low|medium|high",
  "category": "Category name",
  "dueDate": "YYYY-MM-DD",
  "estimatedTime": number,
  "tags": ["tag1", "tag2", "tag3"],
  "subtasks": ["subtask1", "subtask2", "subtask3", "subtask4"]
}}

Be intelligent about the number of tasks - create what makes sense for the request, not a fixed number."""

RECOMMENDATIONS_PROMPT = """You are a productivity expert. Given this task: "{title}" and these existing tasks: {existing}.

Provide 3 specific, actionable recommendations to improve productivity or task completion for this task.
Consider:
- Breaking down complex tasks
- Time management strategies
- Resource requirements
- Potential obstacles and solutions
- Integration with existing tasks

Return only the recommendations as a simple list, each on a new line.
Do not include numbering or bullet points."""

BREAKDOWN_PROMPT = """You are a project management expert. Break down this task into actionable subtasks: "{title}"

Context: {context}

Provide a JSON response with:
{{
  "subtasks": ["specific step 1", "specific step 2", "specific step 3", "specific step 4"],
  "estimatedTime": total_minutes,
  "priority": "low|medium|high",
  "category": "appropriate category",
  "tags": ["tag1", "tag2", "tag3"]
}}

Make subtasks specific, actionable, and in logical order."""

IMPROVEMENTS_PROMPT = """You are a task optimization expert. Review and improve this task:

Title: "{title}"
Description: "{description}"

Provide a JSON response with:
{{
  "improvedTitle": "more specific and actionable title",
  "improvedDescription": "enhanced description with clear objectives",
  "suggestions": ["improvement 1", "improvement 2", "improvement 3"]
}}

Focus on making the task more specific, measurable, and actionable."""
