"""
Server instructions (sent during the MCP handshake) and the documentation
served by the ``docs`` tool.
"""

BOOTSTRAP_PROMPT = """
Codehooks MCP server connected. Every tool runs the Codehooks CLI (coho)
against the configured project and space.

## Configuration
- If a call fails with "Missing required configuration", ask the user for the
  project name and admin token, then call set_project and set_admin_token.
- The space defaults to 'dev'.

## Data
- query_collection - query documents (collection, query, limit defaults to 100)
- create_collection / drop_collection / cap_collection / uncap_collection
- create_index / drop_index - manage query indexes
- add_schema / remove_schema - JSON schema validation per collection
- import / export - bulk data in JSON or CSV

## Code and files
- deploy_code - deploy JavaScript files (package.json created if missing)
- file_upload / file_delete / file_list - static file storage

## Key-value and logs
- kv_get / kv_set / kv_del
- logs - recent system logs for the space

## Documentation
- docs - overview, chatgpt-prompt, workflow-api, examples, all
"""

OVERVIEW = """# Codehooks.io Overview

Codehooks.io is a serverless backend platform with built-in database, key-value storage, and deployment capabilities.

## Key Features:
- Serverless Functions: Deploy JavaScript code as API endpoints
- NoSQL Database: Store and query JSON documents in collections
- Key-Value Store: Fast key-value storage with TTL support
- File Storage: Upload and manage files
- Real-time Logs: Monitor application logs
- Workflows: Build multi-step processes

## Basic Pattern:
import { app } from 'codehooks-js';
app.get('/endpoint', (req, res) => {
  res.json({ message: 'Hello World' });
});
export default app.init();"""

CHATGPT_PROMPT = """# Prompt for Building Backend APIs with Codehooks.io

You are an expert in backend development using Codehooks.io. Generate correct, working JavaScript code for a serverless backend using codehooks-js.

Follow these rules:

- Use the codehooks-js package correctly.
- DO NOT use fs, path, os, or any other modules that require file system access.
- Create REST API endpoints using app.get(), app.post(), app.put(), and app.delete().
- Use the built-in NoSQL document database via:
  - conn.insertOne(collection, document)
  - conn.getOne(collection, ID | Query)
  - conn.findOne(collection, ID | Query)
  - conn.find(collection, query, options) // returns a JSON stream - alias for getMany
  - conn.getMany(collection, query, options)
  - conn.updateOne(collection, ID | Query, updateOperators, options)
  - conn.updateMany(collection, query, document, options)
  - conn.replaceOne(collection, ID | Query, document, options)
  - conn.replaceMany(collection, query, document, options)
  - conn.removeOne(collection, ID | Query)
  - conn.removeMany(collection, query, options)
- Use the key-value store with:
  - conn.set(key, value)
  - conn.get(key)
  - conn.getAll()
  - conn.incr(key, increment)
  - conn.decr(key, decrement)
  - conn.del(key)
  - conn.delAll()
- Implement worker queues with app.worker(queueName, workerFunction) and enqueue tasks using conn.enqueue(queueName, payload).
- Use job scheduling with app.job(cronExpression, async () => { ... }).
- Use app.crudlify() for instant database CRUD REST APIs with validation (Zod, Yup or JSON Schema).
- Use environment variables for secrets and API keys via process.env.VARIABLE_NAME.
- Generate responses in JSON format where applicable.
- Import all required npm packages explicitly and list them in package.json.
- Only implement the functionality explicitly requested.
- Implement proper error handling and logging.

When generating code, always:
1. Import necessary modules from 'codehooks-js'
2. Define your API endpoints and business logic
3. End with: export default app.init();"""

WORKFLOW_API = """# Codehooks Workflow API

Create workflows using persistent queues and state management, with automatic retry, state persistence, and distributed processing.

BASIC WORKFLOW PATTERN:
import { app } from 'codehooks-js';
const workflow = app.createWorkflow('workflowName', 'description', {
  begin: async function (state, goto) {
    state = { message: 'Starting workflow' };
    goto('nextStep', state);
  },
  nextStep: async function (state, goto) {
    goto('end', state);
  },
  end: function (state, goto) {
    goto(null, state); // workflow complete
  }
});

workflow.on('completed', (data) => console.log('Done:', data));
app.post('/start', async (req, res) => {
  const result = await workflow.start('workflowName', req.body);
  res.json(result);
});
export default app.init();

Full docs: https://codehooks.io/docs/workflow-api"""

EXAMPLES = """# Codehooks.io Examples

Simple API:
import { app } from 'codehooks-js';
app.get('/hello', (req, res) => {
  res.json({ message: 'Hello, world!' });
});
export default app.init();

NoSQL database:
import { app, Datastore } from 'codehooks-js';
app.post('/orders', async (req, res) => {
  const conn = await Datastore.open();
  const savedOrder = await conn.insertOne('orders', req.body);
  res.json(savedOrder);
});
app.get('/pending-orders', async (req, res) => {
  const conn = await Datastore.open();
  conn.find('orders', { status: 'pending' }).json(res);
});
export default app.init();

Key-value store:
import { app, Datastore } from 'codehooks-js';
app.post('/settings/:userId', async (req, res) => {
  const conn = await Datastore.open();
  await conn.set(`settings-${req.params.userId}`, req.body);
  res.json({ message: 'Settings saved' });
});
export default app.init();

Worker queue:
import { app, Datastore } from 'codehooks-js';
app.worker('sendEmail', async (req, res) => {
  console.log('Processing email:', req.body.payload);
  res.end();
});
app.post('/send-email', async (req, res) => {
  const conn = await Datastore.open();
  await conn.enqueue('sendEmail', req.body);
  res.json({ message: 'Email request received' });
});
export default app.init();

Scheduled job:
import { app } from 'codehooks-js';
app.job('0 0 * * *', async (req, res) => {
  console.log('Running scheduled task...');
  res.end();
});
export default app.init();"""

DOCS = {
    "overview": OVERVIEW,
    "chatgpt-prompt": CHATGPT_PROMPT,
    "workflow-api": WORKFLOW_API,
    "examples": EXAMPLES,
    "all": "\n\n".join([OVERVIEW, CHATGPT_PROMPT, WORKFLOW_API, EXAMPLES]),
}
